''' Last chance lookup for configuration values.

    A variable not defined here raises an error unless it is found either
    in the configuration file (in the module section) or in the module's
    own `defaults.py`.
'''

LOG_LEVEL = "info"
LOG_FORMATTER_LONG = (
    "[%(asctime)-15s] [{hostname}] "
    "%(process)3d %(levelname)-6s "
    "[%(name)16.16s - %(filename)16.16s:%(lineno)-4d] "
    "%(message)s"
)
LOG_FORMATTER_SHORT = (
    "[%(asctime)-8s] "
    "[%(name)16.16s - %(filename)16.16s:%(lineno)-4d]%(levelname)6s "
    "%(message)s"
)
LOG_DATEFMT = "%H:%M:%S"
LOG_FORMATTER = LOG_FORMATTER_SHORT
LOG_OUTPUT = None
LOG_COLORED = False

# Print module configuration. Accept the name of a module. E.g. "regula.rule"
DEBUG_MODULE_CONFIG = None

# Log every RegulaException at construction time
DEBUG_APP_EXCEPTION = False
