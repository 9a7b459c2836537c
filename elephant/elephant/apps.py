from django.apps import AppConfig


class ElephantConfig(AppConfig):
    name = "elephant"
