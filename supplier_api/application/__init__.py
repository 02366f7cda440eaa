"""
===============================================================================
APPLICATION LAYER
===============================================================================

Los casos de uso viven en `usecases/<contexto>/` y devuelven resultados
tipados; el mapeo a HTTP es responsabilidad de interfaces/.
===============================================================================
"""
