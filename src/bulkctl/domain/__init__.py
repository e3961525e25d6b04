"""Domain layer — value types, raw outcome variants, and taxonomy.

Pure Python only. The domain never imports from services, infrastructure,
commands, or output.
"""
