"""Remove backing files whenever an Asset row is deleted.

Covers direct deletes as well as cascades from a deleted user or article. The
file is only removed once the deleting transaction commits; a rolled back
delete keeps both the row and its file.
"""

from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from .models import Asset
from .storage import remove_file


@receiver(post_delete, sender=Asset, dispatch_uid="assets.remove_asset_file")
def remove_asset_file(sender, instance: Asset, using=None, **kwargs) -> None:
    transaction.on_commit(partial(remove_file, instance.path), using=using)
