"""
Dump the reconstructed audit trail for manual inspection.

Usage:
  PYTHONPATH=. python3 scripts/list_audit_logs.py --limit 20

Environment:
  SUPABASE_URL and SUPABASE_SERVICE_ROLE must be set to run.

This script will:
- Connect to Supabase using the service role key via `get_supabase_service()`
- Fetch the most recent `audit_logs` rows and the `profiles` of their actors
- Print one JSON object per entry, most recent first
"""

import os
import json
import argparse
import logging

from utils.audit import DataUnavailable, load_audit_trail
from utils.session import get_supabase_service


def main():
    parser = argparse.ArgumentParser(description='List reconstructed audit log entries')
    parser.add_argument('--limit', type=int, default=50, help='Number of recent events to fetch (0 for all)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    url = os.getenv('SUPABASE_URL')
    svc_key = os.getenv('SUPABASE_SERVICE_ROLE')
    if not url or not svc_key:
        print('SUPABASE_URL and SUPABASE_SERVICE_ROLE must be set in the environment to run this script')
        return

    svc = get_supabase_service()

    print(f'Fetching last {args.limit or "all"} audit events...')
    try:
        entries = load_audit_trail(svc, limit=args.limit or None)
    except DataUnavailable as e:
        print('Failed to fetch audit logs:', e)
        return

    for entry in entries:
        print(json.dumps({
            'id': entry.id,
            'when': entry.occurred_at.isoformat(),
            'actor': entry.actor_display_name,
            'action': entry.action_code,
            'label': entry.action_label,
            'category': entry.action_category,
            'details': list(entry.rendered_detail),
        }, ensure_ascii=False, default=str))


if __name__ == '__main__':
    main()
