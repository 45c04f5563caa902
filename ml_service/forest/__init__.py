from .decision_rules import DecisionRule, RuleLeaf, build_rule, build_rules
from .ensemble import EnsembleVote, Prediction, RuleEnsemble

__all__ = [
    "DecisionRule",
    "RuleLeaf",
    "build_rule",
    "build_rules",
    "EnsembleVote",
    "Prediction",
    "RuleEnsemble",
]
