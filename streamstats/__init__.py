"""Online statistics over streams of data: metric interfaces, aggregates and joint moments."""

__version__ = "0.1.0"