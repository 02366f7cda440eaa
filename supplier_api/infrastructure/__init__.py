"""
Infrastructure layer: adaptadores concretos (DB pool, esquema, repositorios).

Nada de acá se importa desde domain/ ni application/.
"""
