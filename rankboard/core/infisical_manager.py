from infisical_sdk import InfisicalSDKClient
import os
import logging


class InfisicalManager:
    """
    Thin wrapper over the Infisical SDK used to fetch the Gemini credential.
    Any failure leaves the manager offline so callers can fall back to env vars.
    """
    def __init__(self, logger=None, host: str = "https://app.infisical.com"):
        self.client = None
        self.is_connected = False
        self.logger = logger or logging.getLogger(__name__)
        self.project_id = os.getenv("INFISICAL_PROJECT_ID")
        self.environment = os.getenv("INFISICAL_ENVIRONMENT", "dev")

        if self._is_disabled():
            self.logger.info("🧪 Infisical disabled for this runtime.")
            return

        client_token = os.getenv("INFISICAL_TOKEN")
        client_id = os.getenv("INFISICAL_CLIENT_ID")
        client_secret = os.getenv("INFISICAL_CLIENT_SECRET")

        try:
            if client_token:
                self.client = InfisicalSDKClient(host=host)
                self.client.auth.login(token=client_token)
                self.is_connected = True
                self.logger.info("✅ Infisical Connected (Service Token)")
            elif client_id and client_secret:
                self.client = InfisicalSDKClient(host=host)
                self.client.auth.universal_auth.login(
                    client_id=client_id,
                    client_secret=client_secret
                )
                self.is_connected = True
                self.logger.info("✅ Infisical Connected (Universal Auth)")
            else:
                self.logger.info("Infisical credentials not found. Using environment variables only.")
        except Exception as e:
            self.logger.error(f"❌ Infisical SDK Auth Failed: {e}")
            self.client = None
            self.is_connected = False

    def _is_disabled(self):
        disable_flag = os.getenv("DISABLE_INFISICAL", "").strip().lower()
        if disable_flag in {"1", "true", "yes", "on"}:
            return True
        return os.getenv("PYTEST_CURRENT_TEST") is not None

    def get_secret(self, secret_name):
        """
        Fetches a secret from Infisical. Returns None if not connected or not found.
        """
        if not self.is_connected:
            return None

        try:
            secret = self.client.secrets.get_secret_by_name(
                secret_name=secret_name,
                project_id=self.project_id,
                environment_slug=self.environment,
                secret_path="/"
            )
            return secret.secretValue
        except Exception as e:
            self.logger.warning(f"Failed to get secret '{secret_name}': {e}")
            return None
