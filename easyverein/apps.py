from django.apps import AppConfig


class EasyVereinConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "easyverein"
    verbose_name = "easyVerein API"
