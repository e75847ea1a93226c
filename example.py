from pathlib import Path

from nbrb_convert import NbrbConverter

print(NbrbConverter.__version__)  # 0.1.0

# Default usage: BYN -> USD at official NBRB rates
converter = NbrbConverter()

report = converter.process("2024-12-01 150.50\n2024-12-05; 99,30")
for row in report.rows:
    print(row.date, row.amount, row.status)
print(report.summary)
# => Summary(valid_count=2, total_converted=...)

# Another target currency, bounded concurrency and a request timeout
eur = NbrbConverter("EUR", max_workers=4, timeout=10.0)
print(eur.process_file(Path("operations.csv")).summary)

# Caller-side session: keeps input text, last error and last report
session = converter.session()
session.process("   ")
print(session.error)
# => No valid lines: expected "YYYY-MM-DD amount" separated by a space, comma or semicolon
