from django.apps import AppConfig


class KakeiboConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "kakeibo"
    verbose_name = "家計簿"
