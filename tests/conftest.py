import pytest


def make_mock_svc(recorder, tables=None, fail=None):
    """Mock supabase client: `tables` maps table name -> rows, `fail` holds
    names of tables whose execute() raises."""
    tables = tables or {}
    fail = set(fail or ())

    class MockTable:
        def __init__(self, name):
            self.name = name
            self.filters = []

        def select(self, *args, **kwargs):
            recorder.setdefault('selects', []).append((self.name, args))
            return self

        def order(self, *args, **kwargs):
            recorder.setdefault('orders', []).append((self.name, args, kwargs))
            return self

        def limit(self, n):
            recorder.setdefault('limits', []).append((self.name, n))
            return self

        def eq(self, column, value):
            self.filters.append(('eq', column, value))
            return self

        def in_(self, column, values):
            recorder.setdefault('in_', []).append((self.name, column, list(values)))
            self.filters.append(('in', column, list(values)))
            return self

        def execute(self):
            if self.name in fail:
                raise RuntimeError(f'{self.name} unavailable')
            rows = tables.get(self.name, [])
            for kind, column, value in self.filters:
                if kind == 'eq':
                    rows = [r for r in rows if r.get(column) == value]
                else:
                    rows = [r for r in rows if r.get(column) in value]

            class R:
                data = rows

            return R()

    class MockSvc:
        def table(self, name):
            recorder.setdefault('tables', []).append(name)
            return MockTable(name)

    return MockSvc()


@pytest.fixture
def recorder():
    return {}


@pytest.fixture
def mock_svc(recorder):
    def factory(tables=None, fail=None):
        return make_mock_svc(recorder, tables=tables, fail=fail)

    return factory
