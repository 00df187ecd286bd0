from django.apps import AppConfig


class SluggableConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sluggable"
    verbose_name = "Sluggable"
