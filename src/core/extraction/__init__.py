"""Extracción y normalización de payloads de proveedores.

Por qué un paquete separado del cliente HTTP:
- Los extractores son funciones puras, testeables sin red.
- Los normalizadores son el único punto donde se conoce la forma de cada
  proveedor; el orquestador solo ve `SimRecord` o `Blocked`.
"""
