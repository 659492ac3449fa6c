# AlbumSync Deletion Tests
# Tests for the deletion oracle and sidecar metadata

from pathlib import Path

from albumsync.metadata import SIDECAR_NAME, FileTags, SidecarMetadata
from albumsync.sync.deletion import DeletionOracle, local_identity, remote_identity
from albumsync.sync.item import Both, LocalFile, LocalOnly, RemoteItem, RemoteOnly
from albumsync.utils.hashing import content_hash
from conftest import T0, FakeTrash


class StaticMetadata:
    """LocalMetadata returning fixed tags per file name."""

    def __init__(self, tags: dict[str, set[str]]):
        self.tags = tags
        self.reads: list[Path] = []

    def read_tags(self, file: Path):
        self.reads.append(file)
        if file.name not in self.tags:
            return None
        return FileTags(tags=frozenset(self.tags[file.name]))


def remote(name: str = "a.jpg", tags=(), checksum=None) -> RemoteItem:
    return RemoteItem(item_id="1", name=name, updated=T0, tags=frozenset(tags), checksum=checksum)


class TestRemoteSignals:
    """Tests for deletion signals carried by the remote item."""

    def test_remote_delete_tag(self, album_dir: Path):
        oracle = DeletionOracle(FakeTrash(), None)
        candidate = RemoteOnly(remote=remote(tags={"delete"}), target=album_dir / "a.jpg")
        assert oracle.is_deleted(candidate)
        assert "remotely" in oracle.reason(candidate)

    def test_remote_tag_wins_over_local_signals(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        # Local side says nothing and the trash is empty
        oracle = DeletionOracle(FakeTrash(), StaticMetadata({}))
        candidate = Both(local=LocalFile.from_path(path), remote=remote(tags={"delete"}))
        assert oracle.is_deleted(candidate)

    def test_remote_in_trash(self, album_dir: Path):
        trash = FakeTrash({"ABCDEF"})
        oracle = DeletionOracle(trash, None)
        candidate = RemoteOnly(remote=remote(checksum="abcdef"), target=album_dir / "a.jpg")
        assert oracle.reason(candidate) == "Remote item is in the recycle bin"

    def test_remote_without_checksum_not_looked_up(self, album_dir: Path):
        trash = FakeTrash({"abcdef"})
        oracle = DeletionOracle(trash, None)
        assert not oracle.is_deleted(RemoteOnly(remote=remote(), target=album_dir / "a.jpg"))
        assert trash.lookups == []

    def test_local_signals_ignored_when_remote_exists(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        metadata = StaticMetadata({"a.jpg": {"delete"}})
        oracle = DeletionOracle(FakeTrash(), metadata)

        candidate = Both(local=LocalFile.from_path(path), remote=remote())

        assert not oracle.is_deleted(candidate)
        assert metadata.reads == []


class TestLocalSignals:
    """Tests for deletion signals of local-only files."""

    def test_local_delete_tag(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        oracle = DeletionOracle(FakeTrash(), StaticMetadata({"a.jpg": {"delete", "holiday"}}))
        assert oracle.reason(LocalOnly(local=LocalFile.from_path(path))) == "Tagged 'delete' locally"

    def test_local_file_in_trash(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg", content=b"deleted elsewhere")
        trash = FakeTrash({content_hash(b"deleted elsewhere")})
        oracle = DeletionOracle(trash, None)
        assert oracle.is_deleted(LocalOnly(local=LocalFile.from_path(path)))

    def test_not_deleted(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        oracle = DeletionOracle(FakeTrash({"ffff"}), StaticMetadata({"a.jpg": {"holiday"}}))
        assert not oracle.is_deleted(LocalOnly(local=LocalFile.from_path(path)))

    def test_unreadable_fingerprint_means_not_deleted(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        local = LocalFile.from_path(path)
        path.unlink()

        trash = FakeTrash({content_hash(b"local content")})
        oracle = DeletionOracle(trash, None)

        assert local_identity(local) is None
        assert not oracle.is_deleted(LocalOnly(local=local))

    def test_no_trash(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        oracle = DeletionOracle(None, None)
        assert not oracle.is_deleted(LocalOnly(local=LocalFile.from_path(path)))


class TestIdentities:
    """Tests for trash identities."""

    def test_remote_identity(self):
        assert remote_identity(remote(checksum="abc")) == "abc"
        assert remote_identity(remote(checksum="")) is None

    def test_local_identity_matches_content_hash(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg", content=b"pixels")
        assert local_identity(LocalFile.from_path(path)) == content_hash(b"pixels")


class TestSidecarMetadata:
    """Tests for .albumsync.yaml sidecars."""

    def test_read_tags(self, album_dir: Path, make_file):
        path = make_file(album_dir, "IMG_1.jpg")
        (album_dir / SIDECAR_NAME).write_text(
            "files:\n  img_1.JPG:\n    tags: [Delete, beach]\n",
            encoding="utf-8",
        )

        tags = SidecarMetadata().read_tags(path)

        assert tags is not None
        assert tags.delete
        assert tags.tags == frozenset({"delete", "beach"})

    def test_missing_sidecar(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        assert SidecarMetadata().read_tags(path) is None

    def test_corrupt_sidecar_is_ignored(self, album_dir: Path, make_file, caplog):
        path = make_file(album_dir, "a.jpg")
        (album_dir / SIDECAR_NAME).write_text("files: [unclosed\n", encoding="utf-8")

        assert SidecarMetadata().read_tags(path) is None
        assert "Ignoring unreadable metadata" in caplog.text

    def test_unexpected_structure(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        (album_dir / SIDECAR_NAME).write_text("- just\n- a list\n", encoding="utf-8")
        assert SidecarMetadata().read_tags(path) is None

    def test_cached_per_directory(self, album_dir: Path, make_file):
        path = make_file(album_dir, "a.jpg")
        sidecar = album_dir / SIDECAR_NAME
        sidecar.write_text("files:\n  a.jpg:\n    tags: [delete]\n", encoding="utf-8")

        metadata = SidecarMetadata()
        assert metadata.read_tags(path).delete

        sidecar.write_text("files: {}\n", encoding="utf-8")
        assert metadata.read_tags(path).delete

        metadata.clear()
        assert metadata.read_tags(path) is None
