"""Static completion tables for every pattern type.

Each table is ordered; the order is the tie-break when ranking and the order
shown for an empty query.
"""

import calendar
from types import MappingProxyType
from typing import Mapping, Optional

from inkline.domain.types import CompletionItem, PartialDate, PatternType

CATEGORY_BOOSTS: dict[str, float] = {
    "Quick": 50,
    "Basic": 20,
    "Status": 15,
    "Priority": 30,
    "Roles": 25,
}

PATTERN_BOOSTS: dict[PatternType, dict[str, float]] = {
    PatternType.DATE: {"today": 50, "tomorrow": 50, "yesterday": 30},
    PatternType.PRIORITY: {"high": 30, "medium": 20, "low": 20, "critical": 40},
    PatternType.COLOR: {},
    PatternType.TAG: {},
    PatternType.ASSIGNEE: {"me": 40, "team": 30},
}


def relevance_boost(item: CompletionItem, pattern_type: PatternType) -> float:
    """Category boost plus the type-specific boost for ``item``."""
    boost = CATEGORY_BOOSTS.get(item.category, 0)
    boost += PATTERN_BOOSTS.get(pattern_type, {}).get(item.value.lower(), 0)
    return boost


def _table(pattern_type: PatternType, rows: list[tuple[str, str, str, str]]) -> tuple[CompletionItem, ...]:
    items = []
    for value, label, description, category in rows:
        item = CompletionItem(label=label, value=value, description=description, category=category)
        items.append(
            CompletionItem(
                label=label,
                value=value,
                description=description,
                category=category,
                boost=relevance_boost(item, pattern_type),
            )
        )
    return tuple(items)


DATE_COMPLETIONS = _table(
    PatternType.DATE,
    [
        ("today", "Today", "Current date", "Quick"),
        ("tomorrow", "Tomorrow", "Next day", "Quick"),
        ("yesterday", "Yesterday", "Previous day", "Quick"),
        ("monday", "Monday", "Next Monday", "Weekdays"),
        ("tuesday", "Tuesday", "Next Tuesday", "Weekdays"),
        ("wednesday", "Wednesday", "Next Wednesday", "Weekdays"),
        ("thursday", "Thursday", "Next Thursday", "Weekdays"),
        ("friday", "Friday", "Next Friday", "Weekdays"),
        ("saturday", "Saturday", "Next Saturday", "Weekdays"),
        ("sunday", "Sunday", "Next Sunday", "Weekdays"),
        ("week", "Next Week", "One week from now", "Relative"),
        ("month", "Next Month", "One month from now", "Relative"),
        ("2weeks", "2 Weeks", "Two weeks from now", "Relative"),
        ("3weeks", "3 Weeks", "Three weeks from now", "Relative"),
        ("2months", "2 Months", "Two months from now", "Relative"),
        ("3months", "3 Months", "Three months from now", "Relative"),
        ("6months", "6 Months", "Six months from now", "Relative"),
        ("year", "Next Year", "One year from now", "Relative"),
        ("january", "January", "Next January", "Months"),
        ("february", "February", "Next February", "Months"),
        ("march", "March", "Next March", "Months"),
        ("april", "April", "Next April", "Months"),
        ("may", "May", "Next May", "Months"),
        ("june", "June", "Next June", "Months"),
        ("july", "July", "Next July", "Months"),
        ("august", "August", "Next August", "Months"),
        ("september", "September", "Next September", "Months"),
        ("october", "October", "Next October", "Months"),
        ("november", "November", "Next November", "Months"),
        ("december", "December", "Next December", "Months"),
        ("weekend", "Weekend", "Next weekend", "Periods"),
        ("end-of-month", "End of Month", "Last day of current month", "Periods"),
        ("end-of-year", "End of Year", "Last day of current year", "Periods"),
        ("quarter", "Next Quarter", "Beginning of next quarter", "Periods"),
    ],
)

PRIORITY_COMPLETIONS = _table(
    PatternType.PRIORITY,
    [
        ("critical", "Critical", "Drop everything priority", "Priority"),
        ("high", "High Priority", "Urgent task", "Priority"),
        ("medium", "Medium Priority", "Moderate importance", "Priority"),
        ("low", "Low Priority", "Non-urgent task", "Priority"),
        ("none", "No Priority", "No specific priority", "Priority"),
        ("urgent", "Urgent", "Needs immediate attention", "Status"),
        ("asap", "ASAP", "As soon as possible", "Status"),
        ("blocked", "Blocked", "Cannot proceed", "Status"),
        ("waiting", "Waiting", "Waiting for something", "Status"),
        ("someday", "Someday", "Future consideration", "Status"),
    ],
)

COLOR_COMPLETIONS = _table(
    PatternType.COLOR,
    [
        ("#10b981", "Emerald", "Primary green", "Brand"),
        ("#0891b2", "Cyan", "Primary blue", "Brand"),
        ("#7c3aed", "Violet", "Primary purple", "Brand"),
        ("#dc2626", "Red", "Danger/High priority", "Brand"),
        ("#ea580c", "Orange", "Warning/Medium priority", "Brand"),
        ("#ffffff", "White", "Pure white", "Basic"),
        ("#000000", "Black", "Pure black", "Basic"),
        ("#ef4444", "Red", "Bright red", "Basic"),
        ("#22c55e", "Green", "Bright green", "Basic"),
        ("#3b82f6", "Blue", "Bright blue", "Basic"),
        ("#f59e0b", "Yellow", "Bright yellow", "Basic"),
        ("#8b5cf6", "Purple", "Bright purple", "Basic"),
        ("#06b6d4", "Cyan", "Bright cyan", "Basic"),
        ("#f8fafc", "Gray 50", "Very light gray", "Grays"),
        ("#e2e8f0", "Gray 200", "Light gray", "Grays"),
        ("#94a3b8", "Gray 400", "Medium gray", "Grays"),
        ("#475569", "Gray 600", "Dark gray", "Grays"),
        ("#1e293b", "Gray 800", "Very dark gray", "Grays"),
    ],
)

TAG_COMPLETIONS = _table(
    PatternType.TAG,
    [
        ("meeting", "Meeting", "Meeting-related item", "Work"),
        ("project", "Project", "Project-related", "Work"),
        ("task", "Task", "Specific work task", "Work"),
        ("deadline", "Deadline", "Has a specific deadline", "Work"),
        ("milestone", "Milestone", "Project milestone", "Work"),
        ("review", "Review", "Needs review or approval", "Work"),
        ("research", "Research", "Research required", "Work"),
        ("planning", "Planning", "Planning activity", "Work"),
        ("presentation", "Presentation", "Presentation-related", "Work"),
        ("client", "Client", "Client-related", "Work"),
        ("budget", "Budget", "Budget consideration", "Work"),
        ("training", "Training", "Learning or training", "Work"),
        ("todo", "Todo", "Action item to complete", "Status"),
        ("done", "Done", "Completed item", "Status"),
        ("urgent", "Urgent", "Requires immediate attention", "Status"),
        ("important", "Important", "High importance", "Status"),
        ("blocked", "Blocked", "Waiting on something", "Status"),
        ("waiting", "Waiting", "Waiting for response", "Status"),
        ("progress", "In Progress", "Currently working on", "Status"),
        ("followup", "Follow-up", "Needs follow-up action", "Status"),
        ("on-hold", "On Hold", "Temporarily paused", "Status"),
        ("cancelled", "Cancelled", "No longer needed", "Status"),
        ("idea", "Idea", "Creative or strategic idea", "Content"),
        ("note", "Note", "General note", "Content"),
        ("question", "Question", "Requires clarification", "Content"),
        ("decision", "Decision", "Decision to be made", "Content"),
        ("reference", "Reference", "Reference material", "Content"),
        ("draft", "Draft", "Draft content", "Content"),
        ("template", "Template", "Template or pattern", "Content"),
        ("example", "Example", "Example or sample", "Content"),
        ("personal", "Personal", "Personal item", "Personal"),
        ("health", "Health", "Health-related", "Personal"),
        ("family", "Family", "Family-related", "Personal"),
        ("hobby", "Hobby", "Hobby or interest", "Personal"),
        ("finance", "Finance", "Financial matter", "Personal"),
        ("travel", "Travel", "Travel-related", "Personal"),
        ("shopping", "Shopping", "Shopping list item", "Personal"),
        ("home", "Home", "Home-related task", "Personal"),
        ("learning", "Learning", "Learning activity", "Development"),
        ("skill", "Skill", "Skill development", "Development"),
        ("course", "Course", "Course or education", "Development"),
        ("book", "Book", "Book or reading", "Development"),
        ("article", "Article", "Article to read", "Development"),
        ("video", "Video", "Video to watch", "Development"),
        ("bug", "Bug", "Bug or issue", "Tech"),
        ("feature", "Feature", "New feature", "Tech"),
        ("improvement", "Improvement", "Enhancement", "Tech"),
        ("documentation", "Documentation", "Documentation work", "Tech"),
        ("testing", "Testing", "Testing activity", "Tech"),
        ("deployment", "Deployment", "Deployment task", "Tech"),
        ("maintenance", "Maintenance", "Maintenance work", "Tech"),
        ("refactor", "Refactor", "Code refactoring", "Tech"),
    ],
)

ASSIGNEE_COMPLETIONS = _table(
    PatternType.ASSIGNEE,
    [
        ("john", "John", "Assign to John", "Team"),
        ("sarah", "Sarah", "Assign to Sarah", "Team"),
        ("mike", "Mike", "Assign to Mike", "Team"),
        ("jane", "Jane", "Assign to Jane", "Team"),
        ("alex", "Alex", "Assign to Alex", "Team"),
        ("chris", "Chris", "Assign to Chris", "Team"),
        ("anna", "Anna", "Assign to Anna", "Team"),
        ("david", "David", "Assign to David", "Team"),
        ("lisa", "Lisa", "Assign to Lisa", "Team"),
        ("tom", "Tom", "Assign to Tom", "Team"),
        ("john.doe", "John Doe", "Assign to John Doe", "Team"),
        ("sarah.smith", "Sarah Smith", "Assign to Sarah Smith", "Team"),
        ("mike.johnson", "Mike Johnson", "Assign to Mike Johnson", "Team"),
        ("jane.wilson", "Jane Wilson", "Assign to Jane Wilson", "Team"),
        ("alex.brown", "Alex Brown", "Assign to Alex Brown", "Team"),
        ("manager", "Manager", "Assign to manager", "Roles"),
        ("team-lead", "Team Lead", "Assign to team lead", "Roles"),
        ("developer", "Developer", "Assign to developer", "Roles"),
        ("designer", "Designer", "Assign to designer", "Roles"),
        ("qa", "QA", "Assign to QA team", "Roles"),
        ("product-owner", "Product Owner", "Assign to product owner", "Roles"),
        ("scrum-master", "Scrum Master", "Assign to scrum master", "Roles"),
        ("architect", "Architect", "Assign to architect", "Roles"),
        ("admin", "Admin", "Assign to admin", "Roles"),
        ("support", "Support", "Assign to support team", "Roles"),
        ("frontend", "Frontend Team", "Assign to frontend team", "Teams"),
        ("backend", "Backend Team", "Assign to backend team", "Teams"),
        ("devops", "DevOps Team", "Assign to DevOps team", "Teams"),
        ("design", "Design Team", "Assign to design team", "Teams"),
        ("marketing", "Marketing Team", "Assign to marketing team", "Teams"),
        ("sales", "Sales Team", "Assign to sales team", "Teams"),
        ("hr", "HR Team", "Assign to HR team", "Teams"),
        ("finance", "Finance Team", "Assign to finance team", "Teams"),
        ("me", "Me", "Assign to myself", "Special"),
        ("unassigned", "Unassigned", "Remove assignment", "Special"),
        ("anyone", "Anyone", "Anyone can take this", "Special"),
        ("team", "Team", "Assign to entire team", "Special"),
    ],
)

COMPLETION_TABLES: Mapping[PatternType, tuple[CompletionItem, ...]] = MappingProxyType(
    {
        PatternType.DATE: DATE_COMPLETIONS,
        PatternType.PRIORITY: PRIORITY_COMPLETIONS,
        PatternType.COLOR: COLOR_COMPLETIONS,
        PatternType.TAG: TAG_COMPLETIONS,
        PatternType.ASSIGNEE: ASSIGNEE_COMPLETIONS,
    }
)


def days_in_month(year: int, month: int) -> Optional[int]:
    """Days in ``month`` of ``year`` (leap years included), None if invalid."""
    if not (1000 <= year <= 9999 and 1 <= month <= 12):
        return None
    return calendar.monthrange(year, month)[1]


def day_completions(partial: PartialDate) -> tuple[CompletionItem, ...]:
    """
    Day-of-month candidates for a partial ``YYYY-MM-`` date.

    Labels are the bare day number so a typed partial day (``2`` in
    ``2025-10-2``) ranks against them directly.
    """
    if not partial.is_valid or not partial.days_in_month:
        return ()
    month_name = calendar.month_name[partial.month]
    return tuple(
        CompletionItem(
            label=str(day),
            value=f"{partial.year:04d}-{partial.month:02d}-{day:02d}",
            description=f"{month_name} {day}, {partial.year}",
            category="Days",
        )
        for day in range(1, partial.days_in_month + 1)
        if str(day).startswith(partial.partial_day)
    )
