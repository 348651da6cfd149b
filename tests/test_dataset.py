import pytest

from core.dataset import load_user_queries, distinct_intents
from core.errors import DatasetError
from core.records import UserQuery


def _write(tmp_path, body, name='intents.csv'):
    p = tmp_path / name
    p.write_text(body, encoding='utf-8')
    return p


def test_positional_columns_and_header_skipped(tmp_path):
    p = _write(tmp_path, 'Utterance,Label\n"book a flight to paris",BookFlight\n"what is my balance",CheckBalance\n')
    rows = load_user_queries(p)
    assert rows == [
        UserQuery(text='book a flight to paris', intent='BookFlight'),
        UserQuery(text='what is my balance', intent='CheckBalance'),
    ]


def test_quoted_commas_kept_in_text(tmp_path):
    p = _write(tmp_path, 'Text,Intent\n"paris, then rome",BookFlight\n')
    assert load_user_queries(p)[0].text == 'paris, then rome'


def test_malformed_rows_propagate(tmp_path):
    # no validation: short rows get empty intent, extra columns are dropped
    p = _write(tmp_path, 'Text,Intent\nonly text\n,Empty\na,b,c\n\n')
    rows = load_user_queries(p)
    assert rows == [
        UserQuery(text='only text', intent=''),
        UserQuery(text='', intent='Empty'),
        UserQuery(text='a', intent='b'),
    ]


def test_missing_file_raises(tmp_path):
    with pytest.raises(DatasetError):
        load_user_queries(tmp_path / 'nope.csv')


def test_undecodable_file_raises(tmp_path):
    p = tmp_path / 'bad.csv'
    p.write_bytes(b'Text,Intent\n\xff\xfe\xfa,X\n')
    with pytest.raises(DatasetError):
        load_user_queries(p)


def test_custom_separator_without_header(tmp_path):
    p = _write(tmp_path, 'hello there;Greet\nbye;Goodbye\n')
    rows = load_user_queries(p, has_header=False, separator=';')
    assert [r.intent for r in rows] == ['Greet', 'Goodbye']


def test_distinct_intents_order():
    rows = [UserQuery('a', 'Zeta'), UserQuery('b', 'Alpha'), UserQuery('c', 'Zeta'), UserQuery('d')]
    assert distinct_intents(rows) == ['Zeta', 'Alpha']
    assert distinct_intents(rows, 'value') == ['Alpha', 'Zeta']


def test_loader_does_not_import_model_layer():
    import subprocess, sys
    from pathlib import Path
    src = Path(__file__).resolve().parents[1] / 'src'
    code = "import sys, core.dataset; print(sorted(m for m in sys.modules if m.split('.')[0] in ('intents', 'sklearn')))"
    proc = subprocess.run([sys.executable, '-c', code], capture_output=True, text=True, cwd=str(src))
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.strip() == '[]'


def test_user_query_shared_with_model_layer():
    from intents.models import UserQuery as ModelsUserQuery
    assert ModelsUserQuery is UserQuery
