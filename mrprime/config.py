import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import InvalidArgument
from .primes import DEFAULT_ROUNDS, KEYGEN_ROUNDS


class Settings(BaseModel):
    default_rounds: int = Field(DEFAULT_ROUNDS, ge=1)
    keygen_rounds: int = Field(KEYGEN_ROUNDS, ge=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


# env var -> Settings field
ENV_VARS = {
    "MRPRIME_ROUNDS": "default_rounds",
    "MRPRIME_KEYGEN_ROUNDS": "keygen_rounds",
    "MRPRIME_LOG_LEVEL": "log_level",
}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    values = {}
    for var, field in ENV_VARS.items():
        raw = env.get(var)
        if raw is None or raw.strip() == "":
            continue
        values[field] = raw.strip().upper() if field == "log_level" else raw.strip()
    try:
        return Settings(**values)
    except ValidationError as e:
        raise InvalidArgument(f"bad mrprime configuration: {e}") from e
