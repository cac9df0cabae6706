"""
db/ - Database Layer
====================
Connection-provisioning strategies, schema initialization, and the error
types every database failure is translated into.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
