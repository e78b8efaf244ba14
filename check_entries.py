"""Check recent journal entries and which of them have been analyzed."""
import sys

from selfsight.core.config import settings
from selfsight.core.database import get_supabase
from selfsight.features.entries.dates import format_date
from selfsight.features.entries.models import DiaryEntry
from selfsight.features.insights import summarize

sb = get_supabase()

query = sb.table(settings.ENTRIES_TABLE).select('*').order('created_at', desc=True).limit(25)
if len(sys.argv) > 1:
    query = query.eq('user_id', sys.argv[1])

entries = [DiaryEntry.from_row(row) for row in query.execute().data]

print("=" * 80)
print(f"RECENT ENTRIES ({len(entries)})")
print("=" * 80)

for entry in entries:
    mood = entry.mood or '-'
    tags = ', '.join(entry.tags) or '-'
    print(f"  {format_date(entry.created_at):10} | {mood:14} | {entry.title[:35]:35} | {tags}")

summary = summarize(entries)
print(f"\nAnalyzed: {summary.analyzed_entries}/{summary.total_entries}")
print("Top strengths:", ', '.join(f"{s.strength} ({s.count})" for s in summary.top_strengths) or '-')
print("Top weaknesses:", ', '.join(f"{w.weakness} ({w.count})" for w in summary.top_weaknesses) or '-')
