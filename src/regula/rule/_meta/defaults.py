# Log every rule decision (skipped, evaluated, applied, failed) at debug level
DEBUG_RULE_ENGINE = False

# Log an error when a condition is evaluated to false because of a missing fact
LOG_MISSING_FACTS = True
