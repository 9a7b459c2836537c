"""
WSGI config for the Elephant Party site.

It exposes the WSGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import json
import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# --- Force-load EB environment vars before Django settings ---
eb_env_path = Path("/opt/elasticbeanstalk/bin/get-config")

if eb_env_path.exists():
    try:
        output = subprocess.check_output([str(eb_env_path), "environment"])
        env_data = json.loads(output.decode().strip())
        for k, v in env_data.items():
            os.environ.setdefault(k, v)
    except (subprocess.CalledProcessError, ValueError) as e:
        logger.error("Failed to load EB environment variables: %s", e)


# --- Load Django WSGI application ---
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

from django.core.wsgi import get_wsgi_application  # noqa: E402

application = get_wsgi_application()
