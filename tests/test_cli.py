import yaml
from click.testing import CliRunner

from expense_tracker.cli import main as cli
from expense_tracker.database import count_expenses, insert_expense


def _invoke(tmp_path, *args):
    runner = CliRunner()
    return runner.invoke(
        cli,
        [
            '--config', str(tmp_path / 'missing.yaml'),
            '--db', str(tmp_path / 'expenses.db'),
            *args,
        ],
    )


def test_empty_list(tmp_path):
    res = _invoke(tmp_path, 'list')
    assert res.exit_code == 0, res.output
    assert 'No expenses yet.' in res.output


def test_add_and_list(tmp_path):
    res = _invoke(tmp_path, 'add', '12.50', 'Food', '--note', 'lunch')
    assert res.exit_code == 0, res.output
    assert 'Added expense.' in res.output
    res = _invoke(tmp_path, 'add', '40', 'Rent')
    assert res.exit_code == 0, res.output

    res = _invoke(tmp_path, 'list')
    assert res.exit_code == 0, res.output
    lines = res.output.strip().splitlines()
    assert lines[0].startswith('#2  $40.00  Rent')
    assert lines[1].startswith('#1  $12.50  Food')
    assert lines[1].endswith('lunch')


def test_add_invalid_amount_fails(tmp_path):
    res = _invoke(tmp_path, 'add', '0', 'Food')
    assert res.exit_code == 1
    assert 'positive' in res.output
    assert count_expenses(str(tmp_path / 'expenses.db')) == 0


def test_add_blank_category_fails(tmp_path):
    res = _invoke(tmp_path, 'add', '5', '   ')
    assert res.exit_code == 1
    assert 'Category' in res.output


def test_delete(tmp_path):
    _invoke(tmp_path, 'add', '3', 'Coffee')
    res = _invoke(tmp_path, 'delete', '1')
    assert res.exit_code == 0, res.output
    assert 'Deleted expense #1.' in res.output
    assert count_expenses(str(tmp_path / 'expenses.db')) == 0

    res = _invoke(tmp_path, 'delete', '42')
    assert res.exit_code == 0, res.output


def test_week_filter_hides_old_rows(tmp_path):
    _invoke(tmp_path, 'add', '3', 'Coffee')
    insert_expense(
        str(tmp_path / 'expenses.db'), 9.0, 'Ancient', None,
        '2001-01-01T00:00:00.000+00:00',
    )
    res = _invoke(tmp_path, 'list', '--filter', 'week')
    assert res.exit_code == 0, res.output
    assert 'Coffee' in res.output
    assert 'Ancient' not in res.output

    res = _invoke(tmp_path, 'list')
    assert 'Ancient' in res.output


def test_config_file_sets_database(tmp_path):
    db_path = tmp_path / 'from_config.db'
    cfg_path = tmp_path / 'expenses.yaml'
    cfg_path.write_text(yaml.safe_dump({'db_path': str(db_path), 'week_start': 'monday'}))

    runner = CliRunner()
    res = runner.invoke(cli, ['--config', str(cfg_path), 'add', '1', 'Misc'])
    assert res.exit_code == 0, res.output
    assert count_expenses(str(db_path)) == 1


def test_bad_week_start_in_config(tmp_path):
    cfg_path = tmp_path / 'expenses.yaml'
    cfg_path.write_text(yaml.safe_dump({'db_path': str(tmp_path / 'x.db'), 'week_start': 'blursday'}))

    res = CliRunner().invoke(cli, ['--config', str(cfg_path), 'list'])
    assert res.exit_code == 1
    assert 'Invalid config' in res.output


def test_malformed_config_file(tmp_path):
    cfg_path = tmp_path / 'expenses.yaml'
    cfg_path.write_text('db_path: [unclosed\n')

    res = CliRunner().invoke(cli, ['--config', str(cfg_path), 'list'])
    assert res.exit_code == 1
    assert 'Invalid config' in res.output


def test_unknown_log_level_in_config(tmp_path):
    cfg_path = tmp_path / 'expenses.yaml'
    cfg_path.write_text(yaml.safe_dump({'db_path': str(tmp_path / 'x.db'), 'log_level': 'bogus'}))

    res = CliRunner().invoke(cli, ['--config', str(cfg_path), 'list'])
    assert res.exit_code == 1
    assert 'log_level' in res.output
