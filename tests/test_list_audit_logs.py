import json
import runpy
import sys

from conftest import make_mock_svc

ROWS = {
    'audit_logs': [
        {'id': 1, 'actor_user_id': 'u1', 'action': 'teacher_created', 'details': {'name': 'Omar'},
         'created_at': '2024-05-01T10:00:00+00:00'},
        {'id': 2, 'actor_user_id': 'u2', 'action': 'teacher_deleted', 'details': None,
         'created_at': '2024-05-02T10:00:00+00:00'},
    ],
    'profiles': [{'user_id': 'u1', 'name': 'Sara'}],
}


def test_lists_reconstructed_entries(monkeypatch, capsys):
    monkeypatch.setenv('SUPABASE_URL', 'https://example.supabase.co')
    monkeypatch.setenv('SUPABASE_SERVICE_ROLE', 'service-role-key')

    recorder = {}
    monkeypatch.setattr('utils.session.get_supabase_service', lambda: make_mock_svc(recorder, tables=ROWS), raising=True)
    monkeypatch.setattr(sys, 'argv', ['list_audit_logs.py', '--limit', '5'])

    runpy.run_path('scripts/list_audit_logs.py', run_name='__main__')

    assert recorder['tables'] == ['audit_logs', 'profiles']
    assert recorder['limits'] == [('audit_logs', 5)]
    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith('{')]
    assert [line['id'] for line in lines] == [2, 1]
    assert lines[0]['actor'] == 'Unknown User'
    assert lines[1]['label'] == 'إنشاء معلم'
    assert lines[1]['details'] == ['name: Omar']


def test_missing_env_exits_quietly(monkeypatch, capsys):
    monkeypatch.delenv('SUPABASE_URL', raising=False)
    monkeypatch.delenv('SUPABASE_SERVICE_ROLE', raising=False)
    monkeypatch.setattr(sys, 'argv', ['list_audit_logs.py'])

    runpy.run_path('scripts/list_audit_logs.py', run_name='__main__')

    assert 'must be set' in capsys.readouterr().out


def test_fetch_failure_is_reported(monkeypatch, capsys):
    monkeypatch.setenv('SUPABASE_URL', 'https://example.supabase.co')
    monkeypatch.setenv('SUPABASE_SERVICE_ROLE', 'service-role-key')
    monkeypatch.setattr('utils.session.get_supabase_service', lambda: make_mock_svc({}, fail=['audit_logs']), raising=True)
    monkeypatch.setattr(sys, 'argv', ['list_audit_logs.py'])

    runpy.run_path('scripts/list_audit_logs.py', run_name='__main__')

    assert 'Failed to fetch audit logs' in capsys.readouterr().out
