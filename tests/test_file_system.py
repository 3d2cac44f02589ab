import pytest

from index_bench.cli.benchmark_cli import build_benchmark_parser
from index_bench.util.file_utils import directory_size, human_size


def make_tree(root):
    (root / "_index").mkdir(parents=True)
    (root / "part-00000.parquet").write_bytes(b"x" * 100)
    (root / "part-00001.parquet").write_bytes(b"x" * 50)
    (root / "_index" / "t_c_index.btree.index").write_bytes(b"x" * 10)


def test_copy_keeps_source_unless_asked(tmp_path, filesystem):
    make_tree(tmp_path / "src")

    filesystem.copy(str(tmp_path / "src"), str(tmp_path / "a"), delete_source=False)
    assert (tmp_path / "src").is_dir()
    filesystem.copy(str(tmp_path / "src"), str(tmp_path / "b"), delete_source=True)
    assert not (tmp_path / "src").exists()

    for name in ("a", "b"):
        assert (tmp_path / name / "_index" / "t_c_index.btree.index").is_file()
        assert directory_size(tmp_path / name) == 150


def test_copy_of_missing_source_fails(tmp_path, filesystem):
    with pytest.raises(FileNotFoundError):
        filesystem.copy(str(tmp_path / "missing"), str(tmp_path / "dst"))


def test_delete_missing_path_is_a_no_op(tmp_path, filesystem):
    filesystem.delete(str(tmp_path / "missing"), recursive=True)


def test_delete_directory_tree(tmp_path, filesystem):
    make_tree(tmp_path / "t")
    filesystem.delete(str(tmp_path / "t"), recursive=True)
    assert not (tmp_path / "t").exists()


@pytest.mark.parametrize("num_bytes, expected", [
    (0, "0.0 B"), (1023, "1023.0 B"), (1024, "1.0 KB"), (1536, "1.5 KB"), (5 * 1024 ** 3, "5.0 GB"),
])
def test_human_size(num_bytes, expected):
    assert human_size(num_bytes) == expected


def test_cli_arguments():
    args = build_benchmark_parser().parse_args(["all", "--env", "dev", "--formats", "csv", "parquet"])
    assert args.command == "all"
    assert args.env == "dev"
    assert args.formats == ["csv", "parquet"]
    assert not args.verbose
