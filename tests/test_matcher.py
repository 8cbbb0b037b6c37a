import unittest

from dbsstatementconverter.matcher import apply_wallet_matching, is_top_up_candidate, match_transactions, summarize
from dbsstatementconverter.models import Transaction


def top_up(date='2025-01-10', debit='50.00', ref='REF123'):
  return Transaction(date=date, description=f'TOP-UP TO PAYLAH! {ref}', debit=debit, balance='100.00')


def wallet(date='2025-01-10', debit='50.00', desc='Top-up from bank', credit=''):
  return Transaction(date=date, description=desc, debit=debit, credit=credit)


class MatchTransactionsTest(unittest.TestCase):
  def test_end_to_end_scenario(self):
    primary = [top_up()]
    paylah = [wallet()]
    apply_wallet_matching(primary, paylah)
    self.assertEqual(primary[0].description, '[Wallet] Top-up from bank')
    self.assertEqual(primary[0].match_id, 'M-1')
    self.assertEqual(paylah[0].match_id, 'M-1')
    self.assertTrue(primary[0].matched)

  def test_date_window(self):
    for day, expected in [('2025-01-09', False), ('2025-01-10', True), ('2025-01-11', True), ('2025-01-12', False)]:
      primary, paylah = [top_up()], [wallet(date=day)]
      match_transactions(primary, paylah)
      self.assertEqual(primary[0].match_id is not None, expected, day)

  def test_window_crosses_month_end(self):
    primary, paylah = [top_up(date='2025-01-31')], [wallet(date='2025-02-01')]
    self.assertEqual(match_transactions(primary, paylah), 1)

  def test_first_fit(self):
    primary = [top_up(ref='A'), top_up(ref='B')]
    paylah = [wallet(desc='first'), wallet(desc='second')]
    self.assertEqual(match_transactions(primary, paylah), 2)
    self.assertEqual([p.match_id for p in primary], ['M-1', 'M-2'])
    self.assertEqual([w.match_id for w in paylah], ['M-1', 'M-2'])

  def test_single_candidate_takes_earliest_wallet_entry(self):
    primary = [top_up()]
    paylah = [wallet(date='2025-01-11', desc='later day'), wallet(desc='same day')]
    match_transactions(primary, paylah)
    self.assertEqual(paylah[0].match_id, 'M-1')
    self.assertIsNone(paylah[1].match_id)

  def test_amount_tolerance(self):
    primary, paylah = [top_up(debit='50.00')], [wallet(debit='50.02'), wallet(debit='50.005')]
    match_transactions(primary, paylah)
    self.assertEqual([w.match_id for w in paylah], [None, 'M-1'])

  def test_idempotent(self):
    primary = [top_up(ref='A'), top_up(ref='B', debit='20.00')]
    paylah = [wallet(debit='20.00'), wallet()]
    match_transactions(primary, paylah)
    first = [t.match_id for t in primary + paylah]
    match_transactions(primary, paylah)
    self.assertEqual([t.match_id for t in primary + paylah], first)
    self.assertEqual(first, ['M-1', 'M-2', 'M-2', 'M-1'])

  def test_non_candidates_are_ignored(self):
    primary = [
      Transaction(date='2025-01-10', description='NETS PURCHASE', debit='50.00'),
      Transaction(date='2025-01-10', description='TOP-UP TO PAYLAH! ZERO', debit='0.00'),
      Transaction(date='2025-01-10', description='top-up to paylah! refund', credit='50.00'),
    ]
    paylah = [wallet()]
    self.assertEqual(match_transactions(primary, paylah), 0)
    self.assertFalse(any(is_top_up_candidate(t) for t in primary))

  def test_wallet_credits_are_not_matched(self):
    primary, paylah = [top_up()], [wallet(debit='', credit='50.00')]
    self.assertEqual(match_transactions(primary, paylah), 0)

  def test_unparseable_date_is_not_an_error(self):
    primary, paylah = [top_up(date='31 Xyz')], [wallet()]
    self.assertEqual(match_transactions(primary, paylah), 0)
    self.assertIsNone(primary[0].match_id)

  def test_resets_previous_ids(self):
    primary, paylah = [top_up()], [wallet(date='2025-03-01')]
    primary[0].match_id = paylah[0].match_id = 'M-9'
    match_transactions(primary, paylah)
    self.assertIsNone(primary[0].match_id)
    self.assertIsNone(paylah[0].match_id)


class ApplyWalletMatchingTest(unittest.TestCase):
  def test_rerun_keeps_pairing_and_single_decoration(self):
    primary, paylah = [top_up()], [wallet(desc='Hawker')]
    apply_wallet_matching(primary, paylah)
    apply_wallet_matching(primary, paylah)
    self.assertEqual(primary[0].description, '[Wallet] Hawker')
    self.assertEqual(primary[0].match_id, 'M-1')

  def test_unmatched_flags(self):
    primary = [top_up(), Transaction(date='2025-01-10', description='SALARY', credit='10.00')]
    apply_wallet_matching(primary, [])
    self.assertIs(primary[0].matched, False)
    self.assertEqual(primary[0].description, 'TOP-UP TO PAYLAH! REF123')
    self.assertIsNone(primary[1].matched)

  def test_summary(self):
    primary = [top_up(ref='A'), top_up(ref='B', debit='9.00'),
               Transaction(date='2025-01-10', description='SALARY', credit='10.00')]
    paylah = [wallet(), wallet(debit='3.00')]
    apply_wallet_matching(primary, paylah)
    summary = summarize(primary, paylah)
    self.assertEqual((summary.primary_count, summary.wallet_count, summary.candidate_count, summary.matched_count),
                     (3, 2, 2, 1))


if __name__ == '__main__':
  unittest.main()
