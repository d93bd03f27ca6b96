# Builtins exposed to condition and action expressions
EXPR_SAFE_BUILTINS = [
    "abs", "all", "any", "bool", "dict", "float", "int", "isinstance",
    "len", "list", "max", "min", "round", "set", "sorted", "str", "sum", "tuple",
]
