from django.apps import AppConfig


class ObituariesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.obituaries'
