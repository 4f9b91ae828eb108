"""
Derived views over an interview snapshot.

Every function here is pure: it takes a list of interview documents and
returns a new value without touching the input.
"""

ALL = 'all'

STATUS_BUCKETS = {
    'Pending': 'pending',
    'Passed': 'passed',
    'Failed': 'failed',
    'No Feedback': 'no_feedback',
}

SEARCH_FIELDS = ('company_name', 'job_position', 'interviewer_name')


def compute_stats(interviews):
    """
    Count interviews per status. Unrecognized statuses only count toward `total`.
    """
    stats = {'total': 0, 'pending': 0, 'passed': 0, 'failed': 0, 'no_feedback': 0}
    for interview in interviews:
        stats['total'] += 1
        bucket = STATUS_BUCKETS.get(interview.get('status'))
        if bucket is not None:
            stats[bucket] += 1
    return stats


def select_pending(interviews):
    """Pending interviews, earliest date first. Ties keep their original order."""
    pending = [interview for interview in interviews if interview.get('status') == 'Pending']
    return sorted(pending, key=lambda interview: str(interview.get('interview_date') or ''))


def filter_by_search(interviews, term):
    if not term or not term.strip():
        return list(interviews)
    term = term.lower()
    return [
        interview for interview in interviews
        if any(term in str(interview.get(name) or '').lower() for name in SEARCH_FIELDS)
    ]


def filter_by_status(interviews, status):
    if not status or status == ALL:
        return list(interviews)
    return [interview for interview in interviews if interview.get('status') == status]


def filter_by_priority(interviews, priority):
    if not priority or priority == ALL:
        return list(interviews)
    return [interview for interview in interviews if interview.get('priority_level') == priority]


def filter_interviews(interviews, search='', status=ALL, priority=ALL):
    # all three constraints must hold
    filtered = filter_by_search(interviews, search)
    filtered = filter_by_status(filtered, status)
    return filter_by_priority(filtered, priority)
