"""JSON serialization for proof traces."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from folreasoner.core.logic import (
    Atom, Clause, CompoundTerm, Constant, Function, Literal, Predicate, Variable,
)
from folreasoner.core.unification import Substitution
from .trace import ProofStep, ProofTrace


class TraceJSONEncoder(json.JSONEncoder):
    """JSON encoder for terms, clauses and proof traces."""

    def default(self, obj):
        # Terms
        if isinstance(obj, Variable):
            return {"_type": "Variable", "name": obj.name}

        elif isinstance(obj, Constant):
            return {"_type": "Constant", "name": obj.name}

        elif isinstance(obj, CompoundTerm):
            return {
                "_type": "Term",
                "functor": obj.functor.name,
                "args": list(obj.args)
            }

        # Literals
        elif isinstance(obj, Literal):
            return {
                "_type": "Literal",
                "predicate": obj.atom.predicate.name,
                "args": list(obj.atom.args),
                "polarity": obj.polarity
            }

        # Clauses
        elif isinstance(obj, Clause):
            return {
                "_type": "Clause",
                "literals": list(obj.literals),
                "text": repr(obj)
            }

        elif isinstance(obj, Substitution):
            return {
                "_type": "Substitution",
                "bindings": [[var, term] for var, term in obj.items()]
            }

        elif isinstance(obj, ProofStep):
            return {
                "_type": "ProofStep",
                "index": obj.index,
                "clause": obj.clause,
                "clause_id": obj.clause_id,
                "rule": obj.rule,
                "parents": list(obj.parents),
                "parent_ids": list(obj.parent_ids),
                "unifier": obj.unifier,
                "source": obj.source
            }

        elif isinstance(obj, ProofTrace):
            return {
                "_type": "ProofTrace",
                "length": obj.length,
                "steps": obj.steps
            }

        return super().default(obj)


def decode_object(dct: Dict[str, Any]) -> Any:
    """Decode a JSON dictionary back to terms, literals, clauses or substitutions.

    Proof steps and traces come back as plain dictionaries.
    """
    obj_type = dct.get("_type")

    if obj_type == "Variable":
        return Variable(dct["name"])

    elif obj_type == "Constant":
        return Constant(dct["name"])

    elif obj_type == "Term":
        args = dct["args"]
        return Function(dct["functor"], len(args))(*args)

    elif obj_type == "Literal":
        args = dct["args"]
        return Literal(Atom(Predicate(dct["predicate"], len(args)), args), dct["polarity"])

    elif obj_type == "Clause":
        return Clause(*dct["literals"])

    elif obj_type == "Substitution":
        return Substitution({var: term for var, term in dct["bindings"]})

    return dct


def trace_to_json(trace: ProofTrace, indent: int = 2) -> str:
    return json.dumps(trace, cls=TraceJSONEncoder, indent=indent, ensure_ascii=False)


def trace_from_json(text: str) -> Dict[str, Any]:
    return json.loads(text, object_hook=decode_object)


def save_trace(trace: ProofTrace, path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(trace_to_json(trace))


def load_trace(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return trace_from_json(f.read())
