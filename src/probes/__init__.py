"""Environment probes.

Each probe reads one piece of host, process or repository information
from a ProbeContext and either returns a JSON-serializable value or raises.
Probes are run through the safe-call wrapper by the snapshot assembler.
"""
