import logging
import typing as t
from pathlib import Path

import yaml

from starscope.scope import RootScope
from starscope.utils.error import StarscopeError
from starscope.valuemap import ValueMap, split_name

log = logging.getLogger(__name__)

CONF_NAME = "starscope.conf.yml"

LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')

LOGGING_DEFAULTS = {
    'level': 'info',
    'format': '%(asctime)s - %(message)s',
    'datefmt': '%Y-%m-%d %H:%M:%S',
}


class ConfigurationError(StarscopeError):
    pass


class ConfigurationNotFoundError(ConfigurationError):
    def __init__(self, project_dir: Path):
        self.project_dir = project_dir
        super().__init__(f"Could not find '{CONF_NAME}' in '{project_dir}'")


class ConfigurationFileInvalidError(ConfigurationError):
    def __init__(self, errors: t.List[str]):
        self.errors = errors
        super().__init__(f"invalid configuration: {'; '.join(errors)}")

    def __repr__(self):
        return f"{type(self).__name__}<{self.errors}>"


def explain(conf: t.Any) -> t.List[str]:
    """Describe every problem with a parsed configuration document."""
    if conf is None:
        return []
    if not isinstance(conf, dict):
        return [f"expected a mapping at the top level, got '{type(conf).__name__}'"]

    errors = []
    for key in conf:
        if key not in ('logging', 'variables'):
            errors.append(f"unknown section '{key}'")

    logging_conf = conf.get('logging') or {}
    if not isinstance(logging_conf, dict):
        errors.append("'logging' must be a mapping")
    else:
        for key, value in logging_conf.items():
            if key not in LOGGING_DEFAULTS:
                errors.append(f"unknown logging option '{key}'")
            elif not isinstance(value, str):
                errors.append(f"logging.{key} must be a string")
            elif key == 'level' and value.lower() not in LOG_LEVELS:
                errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

    variables = conf.get('variables') or {}
    if not isinstance(variables, dict):
        errors.append("'variables' must be a mapping")
    else:
        errors.extend(explain_variables(variables))
    return errors


def explain_variables(variables: dict, prefix: str = "variables") -> t.List[str]:
    """Report every variable name which cannot be bound on a root scope."""
    errors = []
    for key, value in variables.items():
        name = str(key)
        try:
            split_name(name)
        except ValueError:
            errors.append(f"invalid variable name '{name}' in {prefix}")
            continue
        if isinstance(value, dict):
            errors.extend(explain_variables(value, f"{prefix}.{name}"))
    return errors


class ConfLogging:
    def __init__(self, conf: t.Optional[dict] = None):
        conf = {**LOGGING_DEFAULTS, **(conf or {})}
        self.level: str = conf['level'].lower()
        self.format: str = conf['format']
        self.datefmt: str = conf['datefmt']

    def __repr__(self):
        return (f"{type(self).__name__}<"
                f"level: {self.level}, format: {self.format}"
                f", datefmt: {self.datefmt}>")


class Configuration:
    def __init__(self, project: Path, conf: t.Optional[dict] = None):
        conf = conf or {}
        errors = explain(conf)
        if errors:
            raise ConfigurationFileInvalidError(errors)
        self.project: Path = project
        self.logging = ConfLogging(conf.get('logging'))
        self.variables: dict = conf.get('variables') or {}

    def root_scope(self) -> RootScope:
        """Build a root scope holding the configured variables."""
        values = ValueMap().update_from(
            {str(key): value for key, value in self.variables.items()})
        return RootScope(values)

    def __repr__(self):
        return (
            f"{type(self).__name__}<"
            f"logging: {self.logging}"
            f", variables: {sorted(self.variables)}"
            ">")


def load(project: Path) -> Configuration:
    conf_path = project.joinpath(CONF_NAME)
    try:
        with open(str(conf_path), 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationNotFoundError(project) from e
    except yaml.YAMLError as e:
        raise ConfigurationFileInvalidError([str(e)]) from e
    log.debug(f"loaded configuration from '{conf_path}'")
    return Configuration(project, config)
