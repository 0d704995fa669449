from enum import Enum

class JTBDForce(str, Enum):
    PAIN_OF_OLD = "pain_of_old"          # Frustration with the current way of working
    PULL_OF_NEW = "pull_of_new"          # Attraction of the AI-enabled way
    ANCHORS_TO_OLD = "anchors_to_old"    # Habits and investments holding people back
    ANXIETY_OF_NEW = "anxiety_of_new"    # Fears about adopting AI
    DEMOGRAPHIC = "demographic"          # Baseline / background information

class StrengthLabel(str, Enum):
    NONE = "none"
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    VERY_STRONG = "very_strong"

class RecommendationCategory(str, Enum):
    STRENGTHEN_PUSH = "strengthen_push"
    REDUCE_PULL = "reduce_pull"
    ADDRESS_ANXIETY = "address_anxiety"
    LEVERAGE_MOMENTUM = "leverage_momentum"

class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

class Level(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class ReadinessLevel(str, Enum):
    READY_TO_SCALE = "ready_to_scale"
    READY_TO_IMPLEMENT = "ready_to_implement"
    READY_WITH_PREPARATION = "ready_with_preparation"
    NEEDS_SIGNIFICANT_PREPARATION = "needs_significant_preparation"
    NOT_READY = "not_ready"

class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"
