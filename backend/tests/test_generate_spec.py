import json
from scripts import generate_spec


def test_prints_hash_by_default(capsys):
    assert generate_spec.main([]) == 0
    out = capsys.readouterr().out.strip()
    _, expected = generate_spec.compute_spec_and_hash()
    assert out == expected


def test_writes_spec_json(tmp_path):
    out = tmp_path / 'nested' / 'openapi.json'
    assert generate_spec.main(['--out', str(out)]) == 0
    body = json.loads(out.read_text())
    assert body['openapi'].startswith('3.')
    assert 'Employee' in body['components']['schemas']


def test_update_then_check_hash(tmp_path):
    snapshot = tmp_path / 'openapi_spec_hash.txt'
    assert generate_spec.main(['--check'], snapshot=snapshot) == 3
    assert generate_spec.main(['--update-hash'], snapshot=snapshot) == 0
    assert generate_spec.main(['--check'], snapshot=snapshot) == 0
    snapshot.write_text('0' * 64 + '\n')
    assert generate_spec.main(['--check'], snapshot=snapshot) == 2


def test_invalid_contract_exit_code(monkeypatch, capsys):
    from app.openapi_parts import ValidationErrors, UnknownSchemaError

    def broken():
        raise ValidationErrors([UnknownSchemaError('Ghost')])
    monkeypatch.setattr(generate_spec, 'build_openapi_spec', broken)
    assert generate_spec.main([]) == 3
    assert 'Ghost' in capsys.readouterr().err
