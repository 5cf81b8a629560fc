"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementan los adaptadores concretos de diccionario.
"""
