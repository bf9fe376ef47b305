"""Option tallies for choice and scale questions."""
import logging
from typing import Dict, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from survey_results.schemas.response import Answer, is_readable, normalized_values

logger = logging.getLogger(__name__)


class OptionTally(BaseModel):
    """
    Selection counts per declared option.

    ``counts`` follows the declared option order. ``total`` is the number of
    answers considered, so counts may sum to more (multi-select) or less
    (blank or unmatched selections) than ``total``.
    """
    counts: Dict[str, int]
    total: int

    model_config = ConfigDict(frozen=True)


def tally_options(options: Sequence[str], answers: Sequence[Answer]) -> Optional[OptionTally]:
    """
    Count how many answers selected each declared option.

    Returns None when the question declares no options; the caller should
    treat the question as free text. Values are matched exactly and
    case-sensitively; values matching no option are ignored.
    """
    if not options:
        return None

    counts: Dict[str, int] = {option: 0 for option in options}
    total = 0

    for answer in answers:
        if not is_readable(answer.value):
            logger.debug("Skipping unreadable answer %s for question %s", answer.id, answer.question_id)
            continue
        total += 1
        for selected in normalized_values(answer.value):
            if selected in counts:
                counts[selected] += 1

    return OptionTally(counts=counts, total=total)
