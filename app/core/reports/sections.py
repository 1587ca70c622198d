"""
Report section catalogue shared by the viewer and the printable document.
"""
from typing import Any, Dict, List

# Viewer navigation, in display order: (id, title, icon, backing report key)
REPORT_SECTIONS = [
    ("personal", "Personal Snapshot", "👤", "personal_snapshot"),
    ("clinical", "Clinical Insights", "🔬", "clinical_insight_snapshot"),
    ("movement", "Movement Observations", "🏃", "movement_observations"),
    ("hypothesis", "Hypotheses", "💡", "kinetic_chain_hypothesis_a"),
    ("load", "Load & Recovery", "⚖️", "load_vs_recovery_overview"),
    ("lifestyle", "Lifestyle Factors", "🏠", "lifestyle_and_postural_contributors"),
    ("mobility", "Mobility Focus", "🧘", "at_home_mobility_focus"),
    ("pattern", "Pattern Analysis", "📊", "why_this_pattern_matters"),
    ("questions", "Questions", "❓", "questions_to_ask_your_practitioner"),
    ("practitioner", "Practitioner Notes", "👨‍⚕️", "practitioner_hand_off_summary"),
    ("next-steps", "Next Steps", "🎯", "next_steps_and_recovery_tools"),
]

# Generic blocks of the printable report: (report key, heading)
GENERIC_SECTIONS_BEFORE_HYPOTHESES = [
    ("clinical_insight_snapshot", "Clinical Insight Snapshot"),
    ("movement_observations", "Movement Observations"),
]
GENERIC_SECTIONS_BEFORE_MOBILITY = [
    ("load_vs_recovery_overview", "Load vs Recovery Overview"),
    ("lifestyle_and_postural_contributors", "Lifestyle & Postural Contributors"),
]
GENERIC_SECTIONS_AFTER_QUESTIONS = [
    ("practitioner_hand_off_summary", "Practitioner Hand-Off Summary"),
    ("practitioner_notes", "Practitioner Notes"),
    ("next_steps_and_recovery_tools", "Next Steps & Recovery Tools"),
]


def has_content(value: Any) -> bool:
    """Empty strings, lists and objects count as absent."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) > 0
    return True


def humanize_key(key: str) -> str:
    """``primary_concern`` -> ``Primary concern``."""
    text = str(key).replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def available_sections(report: Dict[str, Any]) -> List[Dict[str, str]]:
    """Viewer sections whose backing key holds something to show."""
    return [
        {"id": section_id, "title": title, "icon": icon, "key": key}
        for section_id, title, icon, key in REPORT_SECTIONS
        if has_content(report.get(key))
    ]
