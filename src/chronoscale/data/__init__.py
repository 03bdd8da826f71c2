"""Packaged data resources, such as the IETF ``leap-seconds.list`` file."""
