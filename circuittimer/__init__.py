"""CircuitTimer: drift-free circuit workout interval timer."""

__version__ = "0.1.0"
