"""
Builtin command units. Each module exposes ``register(interpreter, options)``
"""
