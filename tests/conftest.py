"""Configuração do pytest para o projeto mailbridge."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import RolloutSettings  # noqa: E402

TEST_CLIENT_ID = "test-app-id"
TEST_CLIENT_SECRET = "test-app-secret"


@pytest.fixture
def rollout_settings() -> RolloutSettings:
    """Settings com segredos e URLs de teste (sem rede real)."""
    return RolloutSettings(
        client_id=TEST_CLIENT_ID,
        client_secret=TEST_CLIENT_SECRET,
        default_user_id="demo-email-user",
        email_api_base_url="https://email.test/api",
        crm_api_base_url="https://crm.test/api",
        credentials_url="https://rollout.test/api/credentials",
    )
