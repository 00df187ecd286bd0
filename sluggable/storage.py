"""
Storage collaborator used by the slug generator.

The generator never touches the ORM directly: it reads record fields and
asks "is this slug taken?" through a ``SlugStorage``. ``DjangoSlugStorage``
is the implementation backed by Django models.
"""
from __future__ import annotations

import re
from typing import Any, Optional, Protocol, Type

from django.db import models
from django.db.models import Q

PATH_SEPARATOR = re.compile(r"\.|__")


class SlugStorage(Protocol):
    def field_value(self, record: Any, path: str) -> Any: ...

    def original_field_value(self, record: Any, field_name: str) -> Any: ...

    def exists(self, record: Any) -> bool: ...

    def identity_key(self, record: Any) -> Any: ...

    def supports_soft_delete(self, model: Type[Any]) -> bool: ...

    def query_exists_with_slug(
        self,
        model: Type[Any],
        slug_field: str,
        candidate: str,
        exclude_key: Any = None,
        include_soft_deleted: bool = False,
        extra_filter: Any = None,
    ) -> bool: ...


class DjangoSlugStorage:
    def field_value(self, record: models.Model, path: str) -> Any:
        """
        Read ``path`` off the record, following relations and dict keys.

        Both ``author.name`` and ``author__name`` are accepted. A missing
        attribute anywhere along the path resolves to an empty string.
        """
        value: Any = record
        for part in PATH_SEPARATOR.split(path):
            if value is None:
                break
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = getattr(value, part, None)
        return "" if value is None else value

    def original_field_value(self, record: models.Model, field_name: str) -> Any:
        # Populated by HasSlug from from_db() and after each save()
        return getattr(record, "_persisted_values", {}).get(field_name)

    def exists(self, record: models.Model) -> bool:
        return not record._state.adding

    def identity_key(self, record: models.Model) -> Any:
        return record.pk

    def supports_soft_delete(self, model: Type[models.Model]) -> bool:
        return getattr(model, "soft_delete_field", None) is not None

    def query_exists_with_slug(
        self,
        model: Type[models.Model],
        slug_field: str,
        candidate: str,
        exclude_key: Any = None,
        include_soft_deleted: bool = False,
        extra_filter: Optional[Any] = None,
    ) -> bool:
        # _base_manager skips any filtering a custom default manager applies
        queryset = model._base_manager.filter(**{slug_field: candidate})

        if extra_filter is not None:
            queryset = self._apply_scope(queryset, extra_filter)

        if exclude_key is not None:
            queryset = queryset.exclude(pk=exclude_key)

        if self.supports_soft_delete(model) and not include_soft_deleted:
            queryset = queryset.filter(**{f"{model.soft_delete_field}__isnull": True})

        return queryset.exists()

    @staticmethod
    def _apply_scope(queryset: models.QuerySet, scope: Any) -> models.QuerySet:
        if isinstance(scope, Q):
            return queryset.filter(scope)
        if isinstance(scope, dict):
            return queryset.filter(**scope)
        if callable(scope):
            return scope(queryset)
        raise TypeError(
            f"Unsupported extra scope {scope!r}: expected Q, dict or callable"
        )
