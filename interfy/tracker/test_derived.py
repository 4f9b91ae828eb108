from django.test import SimpleTestCase

from . import derived


def make_interview(id, status='Pending', date='2024-01-01', company='Acme Corp',
                   position='Engineer', interviewer='Jane Doe', priority='Medium'):
    return {
        'id': id,
        'user_id': 1,
        'company_name': company,
        'job_position': position,
        'interviewer_name': interviewer,
        'interview_date': date,
        'priority_level': priority,
        'status': status,
    }


class ComputeStatsTestCase(SimpleTestCase):
    def test_dashboard_counts(self):
        interviews = [
            make_interview('a', status='Pending', date='2024-03-10'),
            make_interview('b', status='Pending', date='2024-01-05'),
            make_interview('c', status='Passed', date='2024-02-01'),
        ]
        self.assertEqual(
            derived.compute_stats(interviews),
            {'total': 3, 'pending': 2, 'passed': 1, 'failed': 0, 'no_feedback': 0}
        )

    def test_empty_list(self):
        self.assertEqual(
            derived.compute_stats([]),
            {'total': 0, 'pending': 0, 'passed': 0, 'failed': 0, 'no_feedback': 0}
        )

    def test_buckets_sum_to_total_for_known_statuses(self):
        interviews = [
            make_interview('a', status='Pending'),
            make_interview('b', status='Passed'),
            make_interview('c', status='Failed'),
            make_interview('d', status='No Feedback'),
            make_interview('e', status='No Feedback'),
        ]
        stats = derived.compute_stats(interviews)
        self.assertEqual(stats['total'], len(interviews))
        self.assertEqual(stats['pending'] + stats['passed'] + stats['failed'] + stats['no_feedback'], stats['total'])
        self.assertEqual(stats['no_feedback'], 2)

    def test_unknown_status_only_counts_toward_total(self):
        interviews = [
            make_interview('a', status='Passed'),
            make_interview('b', status='Ghosted'),
            {'id': 'c'},
        ]
        stats = derived.compute_stats(interviews)
        self.assertEqual(stats['total'], 3)
        self.assertEqual(stats['pending'] + stats['passed'] + stats['failed'] + stats['no_feedback'], 1)


class SelectPendingTestCase(SimpleTestCase):
    def test_sorted_by_date_ascending(self):
        interviews = [
            make_interview('a', status='Pending', date='2024-03-10'),
            make_interview('b', status='Pending', date='2024-01-05'),
            make_interview('c', status='Passed', date='2024-02-01'),
        ]
        pending = derived.select_pending(interviews)
        self.assertEqual([i['interview_date'] for i in pending], ['2024-01-05', '2024-03-10'])

    def test_ties_keep_original_order(self):
        interviews = [
            make_interview('first', date='2024-05-01'),
            make_interview('early', date='2024-04-01'),
            make_interview('second', date='2024-05-01'),
            make_interview('third', date='2024-05-01'),
        ]
        self.assertEqual(
            [i['id'] for i in derived.select_pending(interviews)],
            ['early', 'first', 'second', 'third']
        )

    def test_idempotent(self):
        interviews = [
            make_interview('a', date='2024-05-01'),
            make_interview('b', status='Failed', date='2024-01-01'),
            make_interview('c', date='2024-02-01'),
            make_interview('d', date='2024-05-01'),
        ]
        once = derived.select_pending(interviews)
        self.assertEqual(derived.select_pending(once), once)

    def test_input_not_modified(self):
        interviews = [make_interview('a', date='2024-05-01'), make_interview('b', date='2024-01-01')]
        derived.select_pending(interviews)
        self.assertEqual([i['id'] for i in interviews], ['a', 'b'])


class FilterTestCase(SimpleTestCase):
    def setUp(self):
        self.interviews = [
            make_interview('acme', company='Acme Corp', position='Designer', interviewer='Sam Lee'),
            make_interview('globex', company='Globex', position='Backend Engineer', interviewer='Ann Roe',
                           status='Passed', priority='High'),
            make_interview('initech', company='Initech', position='Analyst', interviewer='Bob Engel',
                           status='Passed', priority='Low'),
            make_interview('umbrella', company='Umbrella', position='Engineer', interviewer='Kim Park',
                           status='Failed', priority='High'),
        ]

    def test_search_is_case_insensitive(self):
        for term in ('acme', 'ACME', 'AcMe'):
            result = derived.filter_by_search(self.interviews, term)
            self.assertEqual([i['id'] for i in result], ['acme'])

    def test_search_matches_position_and_interviewer(self):
        self.assertEqual([i['id'] for i in derived.filter_by_search(self.interviews, 'analyst')], ['initech'])
        self.assertEqual([i['id'] for i in derived.filter_by_search(self.interviews, 'kim')], ['umbrella'])

    def test_blank_search_is_identity(self):
        for term in ('', '   ', None):
            self.assertEqual(derived.filter_by_search(self.interviews, term), self.interviews)

    def test_status_filter_is_idempotent(self):
        once = derived.filter_by_status(self.interviews, 'Passed')
        self.assertEqual([i['id'] for i in once], ['globex', 'initech'])
        self.assertEqual(derived.filter_by_status(once, 'Passed'), once)

    def test_all_is_a_no_op(self):
        self.assertEqual(derived.filter_by_status(self.interviews, 'all'), self.interviews)
        self.assertEqual(derived.filter_by_priority(self.interviews, 'all'), self.interviews)

    def test_priority_filter(self):
        self.assertEqual(
            [i['id'] for i in derived.filter_by_priority(self.interviews, 'High')],
            ['globex', 'umbrella']
        )

    def test_combined_filter_requires_every_constraint(self):
        result = derived.filter_interviews(self.interviews, search='eng', status='Passed', priority='High')
        self.assertEqual([i['id'] for i in result], ['globex'])

    def test_combined_filter_is_commutative(self):
        a = derived.filter_by_priority(derived.filter_by_status(self.interviews, 'Passed'), 'High')
        b = derived.filter_by_status(derived.filter_by_priority(self.interviews, 'High'), 'Passed')
        self.assertEqual(a, b)
