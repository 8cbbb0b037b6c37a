import argparse
import logging
import sys

from .converter import ReconciliationSession
from .documents import ENGINES
from .export import write_tsv


def main(argv=None):
  parser = argparse.ArgumentParser(description='Convert a DBS statement to TSV and match PayLah top-ups')
  parser.add_argument('primary', help='DBS account statement PDF')
  parser.add_argument('--wallet', action='append', default=[], help='PayLah statement PDF (repeatable)')
  parser.add_argument('--output', help='Output TSV file (default: stdout)')
  parser.add_argument('--engine', choices=ENGINES, default='pdfplumber', help='PDF text engine')
  parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
  args = parser.parse_args(argv)

  logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                      format="%(levelname)s | %(message)s")
  logger = logging.getLogger("dbsstatementconverter")

  session = ReconciliationSession(engine=args.engine)
  for path in args.wallet:
    session.add_wallet_statement(path)
  if not session.load_primary_statement(args.primary):
    logger.error("No valid transactions found; is this a DBS account statement?")
    return 1

  summary = session.summary()
  logger.info(f"Bank: {summary.primary_count} | PayLah: {summary.wallet_count} | "
              f"Matched: {summary.matched_count}/{summary.candidate_count}")

  if args.output:
    write_tsv(args.output, session.primary)
    logger.info(f"TSV saved ➜ {args.output}")
  else:
    sys.stdout.write(session.to_tsv())
  return 0


if __name__ == '__main__':
  sys.exit(main())
