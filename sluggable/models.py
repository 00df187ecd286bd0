import logging

from django.conf import settings
from django.db import IntegrityError, models, transaction
from django.db.models import DEFERRED
from django.utils import timezone

from .generator import SlugGenerator
from .options import SlugOptions

logger = logging.getLogger(__name__)


class HasSlug(models.Model):
    """
    Abstract mixin that fills a slug field on create and update.

    Subclasses implement ``get_slug_options()``. Setting the slug field by
    hand to something other than its saved value makes that value the base
    of the slug instead of the source fields.
    """

    slug_generator = SlugGenerator()

    class Meta:
        abstract = True

    def get_slug_options(self) -> SlugOptions:
        raise NotImplementedError("Subclasses must implement get_slug_options()")

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._persisted_values = {
            name: value
            for name, value in zip(field_names, values)
            if value is not DEFERRED
        }
        return instance

    def generate_slug(self) -> str:
        """Regenerate the slug now, ignoring the create/update switches."""
        return self.slug_generator.generate_slug(self, self.get_slug_options())

    def save(self, *args, **kwargs):
        if self._state.adding:
            self.slug_generator.before_create(self)
        else:
            self.slug_generator.before_update(self)

        options = self.get_slug_options()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and options.slug_field not in update_fields:
            kwargs["update_fields"] = [*update_fields, options.slug_field]

        retries = getattr(settings, "SLUGGABLE_SAVE_RETRIES", 3)
        while True:
            try:
                with transaction.atomic():
                    super().save(*args, **kwargs)
                break
            except IntegrityError as e:
                # Another writer took the slug between our check and insert
                if (
                    retries <= 0
                    or not options.generate_unique_slugs
                    or options.slug_field not in str(e).lower()
                ):
                    raise
                retries -= 1
                logger.warning(
                    f"Slug {getattr(self, options.slug_field)!r} taken on save, regenerating"
                )
                self.slug_generator.generate_slug(self, options)

        self._remember_persisted_values()

    def refresh_from_db(self, using=None, fields=None, **kwargs):
        super().refresh_from_db(using=using, fields=fields, **kwargs)
        if fields is None:
            self._remember_persisted_values()
            return

        # Only the reloaded fields are known to match the database
        attnames = {}
        for field in self._meta.concrete_fields:
            attnames[field.name] = field.attname
            attnames[field.attname] = field.attname
        persisted = getattr(self, "_persisted_values", {})
        for name in fields:
            if name in attnames:
                persisted[attnames[name]] = getattr(self, attnames[name])
        self._persisted_values = persisted

    def _remember_persisted_values(self):
        deferred = self.get_deferred_fields()
        self._persisted_values = {
            field.attname: getattr(self, field.attname)
            for field in self._meta.concrete_fields
            if field.attname not in deferred
        }


class SoftDeleteManager(models.Manager):
    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class SoftDeleteModel(models.Model):
    """
    Abstract base for rows that are marked deleted instead of removed.

    ``objects`` hides trashed rows, ``all_objects`` sees everything. Slug
    uniqueness checks always include trashed rows.
    """

    soft_delete_field = "deleted_at"

    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None

    def delete(self, using=None, keep_parents=False):
        self.deleted_at = timezone.now()
        count = type(self)._base_manager.using(using or self._state.db).filter(
            pk=self.pk
        ).update(deleted_at=self.deleted_at)
        return count, {self._meta.label: count}

    def restore(self):
        self.deleted_at = None
        type(self)._base_manager.using(self._state.db).filter(pk=self.pk).update(
            deleted_at=None
        )

    def force_delete(self, using=None, keep_parents=False):
        return super().delete(using=using, keep_parents=keep_parents)
