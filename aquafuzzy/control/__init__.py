from .types import PhCorrection, RiskLevel, TrapezoidalSet, FuzzyRule, RuleOutputs, WaterInputs, RuleActivation, FuzzyOutputs
from .membership import membership, fuzzify
from .rules import RuleBase, DEFAULT_RULE_BASE, infer
from .config import ControlPolicy, load_policy
from .inference import run_fuzzy_inference, get_membership_degrees
