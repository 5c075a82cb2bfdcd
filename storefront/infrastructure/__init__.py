"""Infrastructure layer module.

Contains configuration, database wiring, logging and the icon asset
storage client.
"""
