import pytest

from imagedesc import MalformedManifest, Manifest, ManifestParser, parse_manifests


def test_parse_from_bytes():
    raw = (
        b'[{"Config":"3f1d.json","RepoTags":["app:1.0","app:latest"],'
        b'"Layers":["a1/layer.tar","b2/layer.tar"]},'
        b'{"Config":"9c2e.json","RepoTags":null,"Layers":["c3/layer.tar"]}]'
    )
    manifests = ManifestParser().parse_from_bytes(raw)

    assert len(manifests) == 2
    assert manifests[0].config == "3f1d.json"
    assert manifests[0].layers == ["a1/layer.tar", "b2/layer.tar"]
    assert set(manifests[0].repo_tags) == {"app:1.0", "app:latest"}
    assert manifests[1].repo_tags == []
    assert [m.config for m in manifests] == ["3f1d.json", "9c2e.json"]


def test_parse_file(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_bytes(b'[{"Config":"abc.json","Layers":["l/layer.tar"]}]')

    manifests = ManifestParser().parse(str(path))
    assert manifests[0].config == "abc.json"


@pytest.mark.parametrize("raw", [
    b"",
    b"not-json",
    b'{"Config":"abc.json"}',
    b'[{"Config":1}]',
    b'[{"Layers":"l/layer.tar"}]',
    b'["abc.json"]',
])
def test_malformed(raw):
    with pytest.raises(MalformedManifest):
        parse_manifests(raw)


def test_null_and_empty():
    assert len(parse_manifests(b"null")) == 0
    assert len(parse_manifests(b"[]")) == 0


def test_encoding_omits_empty_fields():
    manifest = Manifest(config="abc.json", layers=["l/layer.tar"])
    assert manifest.to_json() == b'{"Config":"abc.json","Layers":["l/layer.tar"]}'
    assert Manifest().to_json() == b'{}'


def test_list_encoding():
    manifests = parse_manifests(b'[ {"config": "abc.json", "RepoTags": ["app:1"]} ]')
    assert manifests.to_json() == b'[{"Config":"abc.json","RepoTags":["app:1"]}]'


@pytest.mark.parametrize("raw", [
    b'[{"Config":"abc.json","Layers":[NaN]}]',
    b'[Infinity]',
    b"\xef\xbb\xbf[]",
    '[{"Config":"abc.json"}]'.encode("utf-16"),
    '[]'.encode("utf-32-le"),
])
def test_strict_json_only(raw):
    with pytest.raises(MalformedManifest):
        parse_manifests(raw)


def test_unpaired_surrogate_in_tag():
    manifests = parse_manifests(b'[{"Config":"abc.json","RepoTags":["app:\\udfff"]}]')
    assert manifests[0].repo_tags == ["app:�"]
    assert manifests.to_json() == '[{"Config":"abc.json","RepoTags":["app:�"]}]'.encode("utf-8")
