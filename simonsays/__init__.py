"""Simon memory game running on simulated LEDs, buttons, buzzer and display."""

__version__ = "0.1.0"