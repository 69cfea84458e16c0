"""Work Nearby: match workers and employers by physical proximity."""

__version__ = "0.1.0"
