import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from apidisco.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['apidisco.yaml', 'apidisco.yml']


class ClientConfig(BaseModel):
    """Represents a single API to discover."""

    discovery_url: str = Field(..., description='URL of the root discovery document.')

    api_base: str = Field(..., description='Prefix of every generated request URL.')

    headers: dict[str, str] = Field(
        default_factory=dict,
        description='Default request headers, overriding the JSON Accept/Content-Type defaults.',
    )

    on_collision: Literal['error', 'override'] = Field(
        'error',
        description='Whether duplicate operation names fail the build or the last one wins.',
    )


class ApiDiscoSettings(BaseSettings):
    """Configuration read from ``APIDISCO_*`` environment variables.

    ``APIDISCO_HEADERS`` is parsed as a JSON object.
    """

    model_config = SettingsConfigDict(env_prefix='APIDISCO_')

    discovery_url: str | None = None
    api_base: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    on_collision: Literal['error', 'override'] = 'error'


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.load(Path(path).read_text(), Loader=yaml.SafeLoader) or {}


def _validate(data: dict, source: str | None) -> ClientConfig:
    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        field = '.'.join(str(part) for part in e.errors()[0]['loc']) or None
        raise ConfigurationError('Invalid configuration', config_path=source, field=field)


def get_config(path: str | None = None) -> ClientConfig:
    """Load configuration.

    Looked up in order: an explicit YAML file, ``apidisco.yaml``/``apidisco.yml``
    in the working directory, ``[tool.apidisco]`` in ``pyproject.toml``, then
    ``APIDISCO_*`` environment variables.

    Raises:
        ConfigurationError: If no source provides a valid configuration.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        return _validate(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _validate(load_yaml(candidate), str(candidate))

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        pyproject = tomllib.loads(candidate.read_text())
        tools = pyproject.get('tool', {})

        if 'apidisco' in tools:
            return _validate(tools['apidisco'], str(candidate))

    settings = ApiDiscoSettings()
    if settings.discovery_url and settings.api_base:
        return _validate(settings.model_dump(), None)

    raise ConfigurationError('config not found')
