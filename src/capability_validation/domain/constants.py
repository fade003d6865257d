"""
Domain Constants

Centrally manages constants shared across the execution and evaluation core.
"""

# Default number of executions in flight during a batch run
DEFAULT_MAX_CONCURRENCY = 3

# Default per-execution deadline (300,000 ms)
DEFAULT_TIMEOUT_SECONDS = 300.0

# Scoring dimensions, in report order
SCORE_DIMENSIONS = ["accuracy", "completeness", "creativity", "efficiency"]

# Pass threshold (overall score) per difficulty level
PASS_THRESHOLDS = {
    "beginner": 60,
    "intermediate": 50,
    "advanced": 40,
    "expert": 30,
    "legendary": 20,
}
DEFAULT_PASS_THRESHOLD = 50

# Per-dimension analysis thresholds: >= STRONG is a strength, < WEAK is a weakness
STRENGTH_THRESHOLD = 80
WEAKNESS_THRESHOLD = 60

# Overall score counted as a pass in tool history
HISTORY_PASS_SCORE = 60

# Score distribution buckets for tool history (lower bound inclusive)
SCORE_BUCKETS = ["0-20", "20-40", "40-60", "60-80", "80-100"]

# Variance thresholds for the consistency analysis
CLOSE_VARIANCE = 50
MODERATE_VARIANCE = 200

# Case categories
CATEGORIES = [
    "code_generation",
    "logical_reasoning",
    "creative_writing",
    "problem_solving",
    "data_analysis",
    "translation",
    "knowledge_qa",
    "conversation",
    "code_review",
    "documentation",
    "custom",
]

# Difficulty levels, easiest first
DIFFICULTIES = ["beginner", "intermediate", "advanced", "expert", "legendary"]

# Default tools checked by the runner
DEFAULT_TOOLS = [
    "claude",
    "gemini",
]

# Default model per shipped adapter
DEFAULT_ADAPTER_MODELS = {
    "claude": "claude-haiku-4-5-20251001",
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
    "lmstudio": "qwen2.5-7b",
}
