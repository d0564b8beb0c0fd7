"""Node-Swift build tooling: drive SwiftPM to produce loadable `.node` extensions."""

__version__ = "1.0.0"
