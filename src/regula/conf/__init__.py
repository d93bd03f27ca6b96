import configparser
import json
import logging
import os
import re

from types import ModuleType
from typing import Any, Callable, Dict, Union

from . import sysdefaults


def env(name: str, defval: Any, coercer: Callable[[Any], Any] = None):
    ''' Extract environment value to use as configuration variable
    '''
    value = os.environ.get(name, defval)
    return coercer(value) if callable(coercer) else value


REGULA_SYSTEM_DEFAULTS = env("REGULA_SYSTEM_DEFAULTS", "sysdefaults")
REGULA_CONFIG_FILES = env("REGULA_CONFIG_FILE", "base.ini|config.ini").split('|')
DEBUG_ALL_CONFIG_VALUE = "#ALL"
RX_INVALID_OPTION = re.compile(r"[^A-Za-z\d_]+")


def env_key(module_name: str, key: str) -> str:
    ''' Environment override for a module config value.
        E.g. regula.rule / DEBUG_RULE_ENGINE => REGULA_RULE__DEBUG_RULE_ENGINE
    '''
    return f"{RX_INVALID_OPTION.sub('_', module_name).upper()}__{key}"


def coerce_value(sample: Any, raw: str) -> Any:
    # NOTE: bool is a subclass of int, therefore it must be checked before int.
    if isinstance(sample, bool):
        return raw.strip().lower() in ('1', 'true', 'yes', 'on')
    if isinstance(sample, int):
        return int(raw)
    if isinstance(sample, float):
        return float(raw)
    if isinstance(sample, (dict, list, tuple)):
        return json.loads(raw)
    if isinstance(sample, (str, type(None))):
        return raw

    raise ValueError(f"Not supported config value type [{type(sample)}].")


def __module_config__():  # noqa: C901
    __parser__ = configparser.ConfigParser()
    __parser__.optionxform = lambda s: RX_INVALID_OPTION.sub("_", s.strip()).upper()

    __config__: Dict[str, "ModuleConfig"] = {}

    class ModuleConfig(object):
        def __init__(self, module_name: str, *defaults):
            if module_name in __config__:
                raise RuntimeError(f"Module [{module_name}] already configured.")

            self.__name__ = module_name
            values: Dict[str, Any] = {}
            vdebug: Dict[str, Any] = {}

            def lookup(key, value):
                env_value = os.environ.get(env_key(module_name, key))
                if env_value is not None:
                    return coerce_value(value, env_value), 'env'

                if __parser__.has_option(module_name, key):
                    return coerce_value(value, __parser__.get(module_name, key)), REGULA_CONFIG_FILES

                return value, None

            def load_config(conf):
                if conf is None:
                    return

                if isinstance(conf, ModuleConfig):
                    _iter = conf.items()
                    _trace = conf.__vdebug__
                else:
                    _iter = conf.__dict__.items()
                    _trace = None

                for k, v in _iter:
                    if not k.isupper() or k in values:
                        continue

                    values[k], source = lookup(k, v)
                    if source is not None:
                        vdebug[k] = (values[k], type(values[k]), source)
                    elif _trace:
                        vdebug[k] = _trace[k]
                    else:
                        vdebug[k] = (v, type(v), getattr(conf, '__name__', '<unknown-name>'))

            for conf in defaults + (sysdefaults,):
                load_config(conf)

            if sysdefaults.DEBUG_MODULE_CONFIG in (
                DEBUG_ALL_CONFIG_VALUE,
                module_name,
            ):
                logging.debug("=== START MODULE CONFIG [%s] ===", module_name)
                for k, v in vdebug.items():
                    logging.debug(" - [%s] %s ::= %s", k, v[0], v[1:])
                logging.debug("=/=  END MODULE CONFIG [%s]  =/=", module_name)

            self.__values__ = values
            self.__vdebug__ = vdebug

        def __getattr__(self, name):
            try:
                return self.__values__[name]
            except KeyError:
                raise AttributeError(f"Config [{self.__name__}] has no value [{name}]")

        def __getitem__(self, name):
            return self.__values__[name]

        def get(self, name, default=None):
            return self.__values__.get(name, default)

        def items(self):
            ''' NOTE: only UPPERCASE keys defined in defaults are listed '''
            yield from self.__values__.items()

        def keys(self):
            yield from self.__values__.keys()

        def as_dict(self):
            return self.__values__.copy()

    def get_config(config_key: str, *defaults: Union[ModuleType, ModuleConfig]) -> ModuleConfig:
        if config_key not in __config__:
            __config__[config_key] = ModuleConfig(config_key, *defaults)

        return __config__[config_key]

    ''' Missing files in REGULA_CONFIG_FILES are silently ignored,
        every existing one is read in order (later files win).
    '''
    __parser__.read(REGULA_CONFIG_FILES)
    default_config = get_config(REGULA_SYSTEM_DEFAULTS, sysdefaults)
    return ModuleConfig, get_config, default_config, __config__.items


ModuleConfig, getConfig, default_config, list_config = __module_config__()
