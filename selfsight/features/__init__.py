"""
Features Module - Self-contained feature units.

- analysis: heuristic analyzer, hosted functions, remote analyzer client
- database: Supabase repositories
- entries: entry store and export
- insights: trend and frequency views
- recommendations: resource suggestions
- profiles: accounts and onboarding profile
"""
