"""Service layer: operations over INI files returning ServiceResult.

Services may import from the core (registry, parser, values).
They must never import from commands or output.
"""
