"""Configuração da aplicação."""
import logging
import os
from dataclasses import dataclass
from typing import Union

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    """Lê um booleano de variável de ambiente."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_country(name: str, default: int) -> Union[int, str]:
    """Lê o código do país; valores não numéricos ficam como texto e são rejeitados no uso."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{name} is not a number: {value!r}")
        return value


@dataclass
class PayloadDefaults:
    """Valores padrão dos payloads TWQRP."""

    service_name: str = ""
    country: Union[int, str] = 158
    mutable: bool = False
    sorted_output: bool = True

    @classmethod
    def from_env(cls) -> "PayloadDefaults":
        """Carrega config de variáveis de ambiente."""
        return cls(
            service_name=os.getenv("TWQRP_SERVICE_NAME", ""),
            country=_env_country("TWQRP_COUNTRY", 158),
            mutable=_env_bool("TWQRP_MUTABLE", False),
            sorted_output=_env_bool("TWQRP_SORTED", True),
        )


@dataclass
class AppConfig:
    """Configuração da aplicação."""

    log_level: str = "WARNING"
    payload: PayloadDefaults = None

    def __post_init__(self):
        """Inicializa valores padrão."""
        if self.payload is None:
            self.payload = PayloadDefaults.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Carrega config de variáveis de ambiente."""
        return cls(
            log_level=os.getenv("TWQRP_LOG_LEVEL", "WARNING"),
            payload=PayloadDefaults.from_env(),
        )


# Instância global
app_config = AppConfig.from_env()
