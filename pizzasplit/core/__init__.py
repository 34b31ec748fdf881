"""Core Layer — pure pizza allocation and cost-splitting engine, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic
    - Settings arrive as an explicit OrderSettings argument (no global config reads)

Design Decisions:
    - Functional core separated from imperative shell: routes gather input,
      call the engine, persist the result
"""
