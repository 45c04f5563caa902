"""Núcleo de detección de fallas del motor.

Clasificador por reglas con votación de ensamble, ajuste de confianza por
historial y generación de recomendaciones.
"""
