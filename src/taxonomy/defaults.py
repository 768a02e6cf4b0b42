"""System default rank taxonomy.

Used whenever a tenant has no stored definition, or its stored
definition is unreadable. Tenants customize names and bullets per
organization; the five tier ids never change.
"""

from src.models.taxonomy import RankDefinition, RankTier

DEFAULT_ORG_ID = "default"

DEFAULT_RANK_TIERS: tuple[RankTier, ...] = (
    RankTier(
        id="rank1",
        name="Beginner",
        descriptions=(
            "Has rarely or never used generative AI",
            "Not confident with basic AI terminology",
            "Has almost never used AI at work",
            "Has not taken any AI training",
            "Cannot yet picture what AI could be used for",
        ),
    ),
    RankTier(
        id="rank2",
        name="Basic",
        descriptions=(
            "Knows about AI and has tried it",
            "Has experimented with ChatGPT or similar tools",
            "Roughly understands terms such as prompt",
            "Knows common uses such as text or image generation",
            "AI use at work is not yet a habit",
        ),
    ),
    RankTier(
        id="rank3",
        name="Practice",
        descriptions=(
            "Has started using AI at work",
            "Uses AI at least weekly for drafting emails or summaries",
            "Can refine simple prompts",
            "Has seen results from AI on small tasks",
            "Has joined a small AI project or improvement effort",
        ),
    ),
    RankTier(
        id="rank4",
        name="Advance",
        descriptions=(
            "Gets results from AI in day-to-day work",
            "Builds custom prompts and workflows",
            "Has combined several tools or used API integrations",
            "Can point to clear gains in effort saved or quality",
            "Acts as the AI go-to person in their department",
        ),
    ),
    RankTier(
        id="rank5",
        name="Expert",
        descriptions=(
            "Creates value through advanced AI use",
            "Understands and applies RAG or fine-tuning",
            "Can build complex automation and system integrations",
            "Can design new services or business processes",
            "Can teach and run AI training inside or outside the company",
        ),
    ),
)


def build_default_rank_definition(org_id: str = DEFAULT_ORG_ID) -> RankDefinition:
    """Return the system default taxonomy bound to *org_id*."""
    return RankDefinition(org_id=org_id, ranks=DEFAULT_RANK_TIERS)


DEFAULT_RANK_DEFINITION: RankDefinition = build_default_rank_definition()
