"""Routing — template compiler, matcher and resolver.

Templates are compiled once into ``Route`` objects and collected in a
``Pointer`` registry that matches paths in registration order.
"""
