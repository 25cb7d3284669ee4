"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

Deployments can keep RAPID_API_KEY, SMTP_PASS and friends in a single JSON
secret. Entrypoints call bootstrap_secrets() before Settings.from_env() so the
values look like ordinary environment variables to the rest of the code.
"""

import json
import os
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from stockreport.domain.exceptions import ConfigurationError
from stockreport.domain.ports.secret_store_port import ISecretStore

SECRET_ARN_VARIABLE = "STOCKREPORT_SECRET_ARN"


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes JSON secrets from AWS Secrets Manager."""

    def __init__(self, region: Optional[str] = None, client: Optional[Any] = None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_arn: str) -> dict:
        try:
            response = self._client.get_secret_value(SecretId=secret_arn)
            secrets = json.loads(response["SecretString"])
        except (BotoCoreError, ClientError, KeyError, ValueError) as exc:
            raise ConfigurationError(SECRET_ARN_VARIABLE) from exc
        if not isinstance(secrets, dict):
            raise ConfigurationError(SECRET_ARN_VARIABLE)
        return secrets

    def load_into_env(self, secret_arn: str) -> None:
        """Inject all key-value pairs of a JSON secret into os.environ.

        Values already present in the environment are overwritten.
        """
        secrets = self.get_secret(secret_arn)
        for key, value in secrets.items():
            os.environ[key] = str(value)
        logger.info("Loaded {} setting(s) from Secrets Manager", len(secrets))


def bootstrap_secrets(store: Optional[ISecretStore] = None) -> bool:
    """Load the secret named by STOCKREPORT_SECRET_ARN, if any. Returns True if loaded."""
    secret_arn = os.environ.get(SECRET_ARN_VARIABLE)
    if not secret_arn:
        return False
    (store or SecretsManagerAdapter()).load_into_env(secret_arn)
    return True
