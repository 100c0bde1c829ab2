# Ordered darkest to lightest
DEFAULT_RAMP = "@%#*+=-:. "
