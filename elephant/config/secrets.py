import json
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


def get_secret(secret_name: str, region_name: str = "us-east-1") -> dict:
    """
    Read a JSON secret (e.g. DJANGO_SECRET_KEY, BACKEND_API_URL) from AWS
    Secrets Manager.

    :param secret_name str: the name of the secret to get
    :param region_name: the name of the AWS region, defaults to us-east-1
    :return dict: the decoded SecretString
    :raises ImproperlyConfigured: when the secret cannot be read
    """
    session = boto3.session.Session()
    client = session.client(service_name="secretsmanager", region_name=region_name)
    try:
        response = client.get_secret_value(SecretId=secret_name)
    except (BotoCoreError, ClientError) as exc:
        logger.error("Could not read secret %s: %s", secret_name, exc)
        raise ImproperlyConfigured(f"Secret {secret_name!r} is unavailable") from exc
    return json.loads(response["SecretString"])
