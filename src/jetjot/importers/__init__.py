"""Importers that turn third-party outline files into manuscripts."""
