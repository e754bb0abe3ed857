from django.apps import AppConfig


class SchoolcoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "schoolcore"
    verbose_name = "School core"
