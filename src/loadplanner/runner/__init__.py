"""
runner — the allocation engine, container pool providers, file loading
and the command-line runner.
"""
