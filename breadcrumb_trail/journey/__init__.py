"""Seeded journey generator.

Builds one playthrough trace from the authored content:
  1. Seed a private PRNG from ``cfg.seed`` (mulberry32).
  2. Step loop, starting at ``cfg.start_stage_tag``, up to ``cfg.chain_length``:
     a. Filter eligible breadcrumbs (stage, main-journey flag, anti-reuse,
        requirements, terminal shape).
     b. Weighted draw, biased toward options that can progress and have a
        witness. Up to RETRY_BUDGET redraws if the drawn option's provider
        pool is empty; after that, use a tavernkeeper fallback.
     c. Record the step, then move to a random next stage tag of the chosen
        breadcrumb. Stop on the last step, an end marker or a dead end.
  3. Attach a weighted provider beat to every step and render its tokens.

Output: Journey(steps=[JourneyStep...], issues=[str...]). Issues are
diagnostics for the designer; the generator itself never raises for content
problems.
"""

from .beats import BeatTemplateError, attach_beats, provider_name, render_beat  # noqa: F401
from .core import RETRY_BUDGET, generate_journey  # noqa: F401
from .eligibility import (  # noqa: F401
    WILDCARD_STAGE,
    Eligibility,
    candidate_weight,
    eligible_options,
    is_terminator,
    requirements_met,
)
from .providers import (  # noqa: F401
    TAVERNKEEPER_ROLE,
    fallback_provider,
    provider_pool,
    resolve_provider,
)
from .rng import Prng  # noqa: F401
from .selection import pick_uniform, pick_weighted  # noqa: F401
