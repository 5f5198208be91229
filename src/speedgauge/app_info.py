"""Application metadata."""

name = "SpeedGauge"
version = "0.1.0"
