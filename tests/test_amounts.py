import unittest

from dbsstatementconverter.amounts import (
  clean_amount,
  clean_description,
  detect_statement_year,
  format_date,
  parse_amount,
  resolve_short_date,
  walk_years,
)


class CleanAmountTest(unittest.TestCase):
  def test_keeps_well_formed_amounts(self):
    self.assertEqual(clean_amount('1,234.56'), '1,234.56')
    self.assertEqual(clean_amount('50.00 CR'), '50.00 CR')
    self.assertEqual(clean_amount('50.00DB'), '50.00DB')
    self.assertEqual(clean_amount('-12.5'), '-12.5')
    self.assertEqual(clean_amount('  12.30 '), '12.30')

  def test_rejects_non_amounts(self):
    self.assertEqual(clean_amount('abc'), '')
    self.assertEqual(clean_amount('12.34abc'), '')
    self.assertEqual(clean_amount(''), '')
    self.assertEqual(clean_amount(None), '')


class ParseAmountTest(unittest.TestCase):
  def test_values(self):
    self.assertAlmostEqual(parse_amount('1,234.56'), 1234.56)
    self.assertAlmostEqual(parse_amount('50.00CR'), 50.0)
    self.assertAlmostEqual(parse_amount('50.00 DB'), -50.0)

  def test_empty_and_garbage_are_zero(self):
    self.assertEqual(parse_amount(''), 0.0)
    self.assertEqual(parse_amount('n/a'), 0.0)


class DateHelpersTest(unittest.TestCase):
  def test_format_date(self):
    self.assertEqual(format_date('30/11/2025'), '2025-11-30')
    self.assertEqual(format_date('31 Dec'), '31 Dec')

  def test_resolve_short_date(self):
    self.assertEqual(resolve_short_date('31 Dec', 2024), '2024-12-31')
    self.assertEqual(resolve_short_date('5 jan', 2025), '2025-01-05')
    self.assertEqual(resolve_short_date('05 Jan 2025', 2024), '2025-01-05')

  def test_resolve_short_date_rejects_bad_dates(self):
    self.assertIsNone(resolve_short_date('31 Feb', 2024))
    self.assertIsNone(resolve_short_date('12 Xyz', 2024))
    self.assertIsNone(resolve_short_date('hello', 2024))

  def test_clean_description(self):
    self.assertEqual(clean_description('  POS\tPURCHASE \n NTUC  '), 'POS PURCHASE NTUC')


class DetectStatementYearTest(unittest.TestCase):
  def test_statement_date_marker(self):
    self.assertEqual(detect_statement_year(['DBS PayLah', 'Statement Date : 13 Jan 2025']), 2025)
    self.assertEqual(detect_statement_year(['statement date. 2 Feb 2023']), 2023)

  def test_leading_date_line(self):
    self.assertEqual(detect_statement_year(['17 Dec 2024 123 456']), 2024)
    self.assertEqual(detect_statement_year(['17 Dec 2024']), 2024)

  def test_first_marker_in_document_order_wins(self):
    lines = ['01 Dec 2023 to 31 Dec 2023', 'Statement Date : 13 Jan 2024']
    self.assertEqual(detect_statement_year(lines), 2024)

  def test_any_date_with_year(self):
    self.assertEqual(detect_statement_year(['Period 01 Nov 2023 to 30 Nov 2023']), 2023)

  def test_fallback(self):
    self.assertEqual(detect_statement_year(['no dates here'], default=2020), 2020)


class WalkYearsTest(unittest.TestCase):
  def test_single_year(self):
    self.assertEqual(walk_years([2, 2, 3], 2024), [2024, 2024, 2024])

  def test_new_year_seam(self):
    self.assertEqual(walk_years([11, 11, 0, 0], 2025), [2024, 2024, 2025, 2025])

  def test_empty(self):
    self.assertEqual(walk_years([], 2024), [])


if __name__ == '__main__':
  unittest.main()
