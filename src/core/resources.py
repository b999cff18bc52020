"""Generic resource controller shared by every content entity.

A concrete resource (user, article, opinion, asset) is a ``ResourceViewSet``
subclass that names its model, its ``IncludeModelSerializer`` and a few
per-entity rules. The viewset supplies the five canonical operations:

* ``list``     GET    /            -> 200, honors ``limit``/``offset``
* ``retrieve`` GET    /{id}        -> 200 or NotFound
* ``create``   POST   /            -> 201, Conflict on uniqueness violations
* ``update``   PUT    /{id}        -> 200, partial merge (PATCH behaves the same)
* ``destroy``  DELETE /{id}        -> 204 or NotFound

Every operation honors the include-set: query parameters named after a
relation (``?author=true``) attach that relation to the payload.
"""

import logging
import re
from contextlib import contextmanager
from typing import Any, ClassVar, Iterator, Mapping

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils.module_loading import import_string
from rest_framework import serializers, status
from rest_framework.response import Response

from .exceptions import Conflict, InvalidParameter, NotFound
from .permissions import IsOwnerOrReadOnly
from .response import BaseViewSet, api_response

logger = logging.getLogger(__name__)

_NON_NEGATIVE_INT = re.compile(r"^\d+$")
# Largest value a database integer column (and LIMIT/OFFSET) accepts.
MAX_WINDOW_VALUE = 2**63 - 1


def parse_include(query_params: Mapping[str, Any], allowed) -> dict[str, bool]:
    """Coerce ``"true"``/``"false"`` query values into the include-set.

    Only relation names listed in ``allowed`` are considered; unknown keys are
    ignored and absent keys default to excluded.
    """

    include = {}
    for name in allowed:
        raw = query_params.get(name)
        include[name] = isinstance(raw, str) and raw.strip().lower() == "true"
    return include


def parse_window(query_params: Mapping[str, Any]) -> tuple[int | None, int]:
    """Return ``(limit, offset)`` from the query string.

    Both are optional; when given they must be non-negative integers no
    larger than ``MAX_WINDOW_VALUE``.
    """

    values: dict[str, int | None] = {"limit": None, "offset": 0}
    for name in values:
        raw = query_params.get(name)
        if raw is None or raw == "":
            continue
        if not _NON_NEGATIVE_INT.match(str(raw)) or int(raw) > MAX_WINDOW_VALUE:
            raise InvalidParameter(
                f"Invalid parameters for {name}. {name} must be a non-negative integer",
                data={name: raw},
            )
        values[name] = int(raw)
    return values["limit"], values["offset"] or 0


class IncludeModelSerializer(serializers.ModelSerializer):
    """ModelSerializer whose related payloads are switched on per request.

    ``includes`` maps a relation name to ``(serializer dotted path, many)``.
    The dotted path is resolved lazily so serializers of different apps can
    reference each other. Nested serializers never receive an include-set, so
    expansion is one level deep.
    """

    includes: ClassVar[dict[str, tuple[str, bool]]] = {}

    def __init__(self, *args, include: Mapping[str, bool] | None = None, **kwargs):
        self.include = dict(include or {})
        super().__init__(*args, **kwargs)

    def get_fields(self):
        fields = super().get_fields()
        for name, (serializer_path, many) in self.includes.items():
            if self.include.get(name):
                serializer_class = import_string(serializer_path)
                fields[name] = serializer_class(many=many, read_only=True)
        return fields


class ResourceViewSet(BaseViewSet):
    """CRUD controller parameterized by model, serializer and uniqueness rules."""

    resource_name = "Resource"
    # Fields whose combination is unique in the database; reported on Conflict.
    unique_fields: tuple[str, ...] = ()
    # Attribute pointing at the owning user; "" means the object is the user.
    owner_field = "owner"
    permission_classes = [IsOwnerOrReadOnly]
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    # --- include-set ---------------------------------------------------------------

    def get_include(self) -> dict[str, bool]:
        serializer_class = self.get_serializer_class()
        return parse_include(self.request.query_params, getattr(serializer_class, "includes", {}))

    def get_serializer(self, *args, **kwargs):
        serializer_class = self.get_serializer_class()
        if issubclass(serializer_class, IncludeModelSerializer):
            kwargs.setdefault("include", self.get_include())
        kwargs.setdefault("context", self.get_serializer_context())
        return serializer_class(*args, **kwargs)

    def get_queryset(self):
        queryset = super().get_queryset()
        serializer_class = self.get_serializer_class()
        includes = getattr(serializer_class, "includes", {})
        for name, enabled in self.get_include().items():
            if not enabled:
                continue
            _, many = includes[name]
            queryset = queryset.prefetch_related(name) if many else queryset.select_related(name)
        return queryset

    # --- lookup --------------------------------------------------------------------

    def find(self, pk, queryset=None, resource_name: str | None = None):
        """Fetch one row by primary key or raise NotFound (no permission checks)."""
        queryset = self.get_queryset() if queryset is None else queryset
        name = resource_name or self.resource_name
        try:
            return queryset.get(pk=pk)
        except (queryset.model.DoesNotExist, ValueError, DjangoValidationError):
            raise NotFound(f"{name} not found", data={"id": str(pk)})

    def get_object(self):
        obj = self.find(self.kwargs[self.lookup_url_kwarg or self.lookup_field])
        self.check_object_permissions(self.request, obj)
        return obj

    def owner_of(self, obj):
        """Return the user that may modify ``obj``."""
        if not self.owner_field:
            return obj
        return getattr(obj, self.owner_field, None)

    # --- persistence ---------------------------------------------------------------

    @contextmanager
    def conflict_guard(
        self,
        values: Mapping[str, Any] | None = None,
        unique_fields: tuple[str, ...] | None = None,
        resource_name: str | None = None,
    ) -> Iterator[None]:
        """Turn a uniqueness violation raised by the database into Conflict."""
        name = resource_name or self.resource_name
        fields = self.unique_fields if unique_fields is None else unique_fields
        try:
            with transaction.atomic():
                yield
        except IntegrityError as exc:
            values = values or {}
            data = {}
            for field in fields:
                if field in values:
                    value = values[field]
                    data[field] = str(getattr(value, "pk", value))
            logger.info("%s conflict on %s", name, data or "unique constraint")
            raise Conflict(f"{name} already exists", data=data or None) from exc

    def save_unique(self, serializer, **kwargs):
        with self.conflict_guard({**serializer.validated_data, **kwargs}):
            return serializer.save(**kwargs)

    def perform_create(self, serializer):
        return self.save_unique(serializer)

    def perform_update(self, serializer):
        return self.save_unique(serializer)

    def perform_destroy(self, instance) -> None:
        with transaction.atomic():
            instance.delete()

    # --- operations ----------------------------------------------------------------

    def list_window(self, queryset, message: str = "Success"):
        """Serialize one ``limit``/``offset`` window of ``queryset``."""
        limit, offset = parse_window(self.request.query_params)
        queryset = self.filter_queryset(queryset)
        window = queryset[offset:] if limit is None else queryset[offset:offset + limit]
        serializer = self.get_serializer(window, many=True)
        return api_response(serializer.data, message=message)

    def list(self, request, *args, **kwargs):
        return self.list_window(self.get_queryset())

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        return api_response(self.get_serializer(instance).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = self.perform_create(serializer)
        logger.info("%s %s created", self.resource_name, instance.pk)
        return api_response(
            self.get_serializer(instance).data,
            status=status.HTTP_201_CREATED,
            message=f"{self.resource_name} created successfully",
        )

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        # PUT and PATCH both merge the provided fields into the stored entity.
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        instance = self.perform_update(serializer)
        if getattr(instance, "_prefetched_objects_cache", None):
            instance._prefetched_objects_cache = {}
        return api_response(self.get_serializer(instance).data, message=f"{self.resource_name} updated")

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        pk = instance.pk
        self.perform_destroy(instance)
        logger.info("%s %s deleted", self.resource_name, pk)
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)


__all__ = ["IncludeModelSerializer", "ResourceViewSet", "parse_include", "parse_window"]
