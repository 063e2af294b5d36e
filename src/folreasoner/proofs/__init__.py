"""
Clause storage, search state and proof traces.
"""

from .database import Candidate, ClauseArena, ClauseDatabase
from .state import ProofState
from .trace import ProofStep, ProofTrace
from .serialization import (
    TraceJSONEncoder, decode_object,
    trace_to_json, trace_from_json,
    save_trace, load_trace
)

__all__ = [
    'Candidate', 'ClauseArena', 'ClauseDatabase', 'ProofState',
    'ProofStep', 'ProofTrace',
    'TraceJSONEncoder', 'decode_object',
    'trace_to_json', 'trace_from_json',
    'save_trace', 'load_trace'
]
