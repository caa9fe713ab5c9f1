"""demo api emitting logs, traces and metrics over otlp to the lgtm stack"""

__version__ = "1.0.0"
