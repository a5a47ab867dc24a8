"""
Tests for the manifest generator script.
"""

import json

from conftest import sha256
from manifest_gen import generate_manifest, main
from resource_sync.manifest import FileEntry, ResourceManifest


class TestGenerateManifest:

    def test_hashes_both_categories(self, temp_dir):
        (temp_dir / "fonts").mkdir()
        (temp_dir / "fonts" / "a.ttf").write_bytes(b"font")
        (temp_dir / "images" / "petpet").mkdir(parents=True)
        (temp_dir / "images" / "petpet" / "0.png").write_bytes(b"frame")

        manifest = generate_manifest(temp_dir)

        assert manifest.fonts == [FileEntry("a.ttf", sha256(b"font"))]
        assert manifest.images == [FileEntry("petpet/0.png", sha256(b"frame"))]

    def test_missing_category_is_empty(self, temp_dir):
        (temp_dir / "images").mkdir()
        manifest = generate_manifest(temp_dir)
        assert manifest.fonts == []
        assert manifest.images == []

    def test_skips_partial_downloads_and_hidden_files(self, temp_dir):
        images = temp_dir / "images"
        images.mkdir()
        (images / "_download_k3j9x2ab.part").write_bytes(b"partial")
        (images / ".DS_Store").write_bytes(b"junk")
        (images / "a.png").write_bytes(b"whole")

        manifest = generate_manifest(temp_dir)

        assert [e.file for e in manifest.images] == ["a.png"]

    def test_keeps_resource_named_like_download_prefix(self, temp_dir):
        images = temp_dir / "images"
        images.mkdir()
        (images / "_download_x.png").write_bytes(b"real image")

        manifest = generate_manifest(temp_dir)

        assert [e.file for e in manifest.images] == ["_download_x.png"]

    def test_sorted_paths(self, temp_dir):
        images = temp_dir / "images"
        images.mkdir()
        for name in ("c.png", "a.png", "b.png"):
            (images / name).write_bytes(name.encode())

        assert [e.file for e in generate_manifest(temp_dir).images] == ["a.png", "b.png", "c.png"]


class TestMain:

    def test_writes_parseable_manifest(self, temp_dir, capsys):
        (temp_dir / "fonts").mkdir()
        (temp_dir / "fonts" / "a.ttf").write_bytes(b"font")

        assert main([str(temp_dir)]) == 0

        data = json.loads((temp_dir / "resources.json").read_text())
        manifest = ResourceManifest.from_dict(data)
        assert manifest.fonts == [FileEntry("a.ttf", sha256(b"font"))]
        assert "1 fonts, 0 images" in capsys.readouterr().out

    def test_output_option(self, temp_dir):
        out = temp_dir / "out.json"
        assert main([str(temp_dir), "--output", str(out)]) == 0
        assert json.loads(out.read_text()) == {"fonts": [], "images": []}

    def test_missing_directory(self, temp_dir):
        assert main([str(temp_dir / "nope")]) == 1
