"""bundlevalley — Community Center bundle progress tracker."""

__version__ = "0.1.0"
