"""
Exceptions raised inside the demo service
"""


class DemoServiceError(Exception):
    """Base exception for the demo service"""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class SimulatedFailureError(DemoServiceError):
    """Failure injected by the simulated workload"""
    pass


class ConfigurationError(DemoServiceError):
    """Telemetry or application misconfiguration"""
    pass
