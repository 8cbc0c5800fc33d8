import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "calm_cashflow.settings")

application = get_wsgi_application()
