import logging

from imagedesc import Manifest, parse_image
from imagedesc.BUILDERS.repo_builder import RepoBuilder
from imagedesc.MODELS.repository import Layer, LayerFile

RAW = (
    b'{"created":"2023-01-01T00:00:00Z","docker_version":"24.0.5",'
    b'"history":['
    b'{"created_by":"ADD file:abc in /"},'
    b'{"created_by":"CMD [\\"sh\\"]","empty_layer":true},'
    b'{"created_by":"RUN apk add curl"}],'
    b'"rootfs":{"type":"layers","diff_ids":["sha256:aa","sha256:bb"]}}'
)


def test_build_one_repo_per_tag():
    image = parse_image(RAW)
    manifest = Manifest(
        config="abc.json",
        layers=["a/layer.tar", "b/layer.tar"],
        repo_tags=["app:1.0", "app:latest"],
    )
    repos = RepoBuilder(layer_sizes={"a/layer.tar": 100}).build(image, manifest)

    assert [r.tag for r in repos] == ["app:1.0", "app:latest"]
    repo = repos[0]
    assert repo.docker_version == "24.0.5"
    assert repo.created == "2023-01-01T00:00:00Z"
    assert [l.root for l in repo.layers] == ["a/layer.tar", "b/layer.tar"]
    assert [l.command for l in repo.layers] == ["ADD file:abc in /", "RUN apk add curl"]
    assert [l.size for l in repo.layers] == [100, 0]
    assert repo.layers[0].files == []


def test_untagged_image():
    image = parse_image(b'{"rootfs":{"type":"layers"}}')
    repos = RepoBuilder().build(image, Manifest(config="abc.json"))
    assert len(repos) == 1
    assert repos[0].tag == ""
    assert repos[0].created == ""
    assert repos[0].layers == []


def test_mismatch_logs_warning(caplog):
    image = parse_image(RAW)
    manifest = Manifest(layers=["a/layer.tar", "b/layer.tar", "c/layer.tar"])

    with caplog.at_level(logging.WARNING):
        repos = RepoBuilder().build(image, manifest)

    assert "layer-producing history entries" in caplog.text
    assert repos[0].layers[2].command == ""


def test_layer_files_nest():
    layer = Layer(
        root="a/layer.tar",
        files=[LayerFile(name="etc", path="/etc", is_dir=True,
                         children=[LayerFile(name="hosts", path="/etc/hosts", size=12)])],
    )
    assert layer.files[0].children[0].path == "/etc/hosts"
    assert layer.files[0].children[0].children == []
