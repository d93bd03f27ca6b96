import importlib
import logging

from .conf import sysdefaults

__version__ = "0.3.0"
__all__ = ('config', 'logger', 'setupModule')

CONFIG_MODULE_SUFFIXES = ('._meta', '.conf', '._config', '.config', '.cfg')


def setupModule(module_name, *upstreams):
    ''' Every sub-package calls this from its `_meta` module to get
        a (config, logger) pair keyed by the package name. Defaults
        are read from `<module_name>.defaults` when no upstream is given.
    '''
    from regula.logs import getLogger
    from regula.conf import getConfig

    def _config_name(module):
        if isinstance(module, str):
            for suffix in CONFIG_MODULE_SUFFIXES:
                if module.endswith(suffix):
                    return module[:-len(suffix)]

        return module

    config_key = _config_name(module_name)

    if not upstreams:
        try:
            upstreams = (importlib.import_module(f"{module_name}.defaults"),)
        except ImportError as e:
            logging.warning(
                f"Unable to import configuration defaults for module [{module_name}]. {e}"
            )

    config = getConfig(config_key, *upstreams)
    logger = getLogger(config_key, config)
    return config, logger


config, logger = setupModule(__name__, sysdefaults)
