"""trellis-sounds: sound pack cache and player for the Adafruit NeoTrellis M4."""

__version__ = "0.1.0"
