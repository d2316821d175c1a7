"""SoundSocial music-metadata synchronization layer."""

__version__ = "0.1.0"
