RULE_DEFINITION_ENCODING = "utf-8"
