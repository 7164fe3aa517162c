"""Runtime settings read from environment variables."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    github_api_url: str = "https://api.github.com"
    request_timeout_seconds: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the process environment (or the given mapping).

        Raises:
            ValueError: When REQUEST_TIMEOUT_SECONDS is not a positive number
        """
        env = os.environ if environ is None else environ

        timeout = None
        raw_timeout = env.get("REQUEST_TIMEOUT_SECONDS", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"REQUEST_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
                ) from None
            if timeout <= 0:
                raise ValueError(
                    f"REQUEST_TIMEOUT_SECONDS must be positive, got {raw_timeout!r}"
                )

        return cls(
            github_api_url=env.get("GITHUB_API_URL") or cls.github_api_url,
            request_timeout_seconds=timeout,
            log_level=(env.get("LOG_LEVEL") or cls.log_level).upper()
        )
