"""Tests for dSYM bundle loading and DWARF binary selection."""

import pytest

from conftest import CRASHY_UUID, KIT_UUID, make_dsym, uuid_line

from symbo.errors import DSYMLoadError
from symbo.models.dsym import DSYMFile, discover_binary_paths
from symbo.models.identifiers import Architecture, BinaryUUID
from symbo.tools.dwarfdump import DSYMSlice
from symbo.tools.runner import ToolResult

ARM_UUID = "11111111-2222-3333-4444-555555555555"


def test_load_bundle(crashy_dsym, fake_dumper):
    dsym = DSYMFile.load(crashy_dsym, fake_dumper)
    binary = str(crashy_dsym / "Contents/Resources/DWARF/Crashy")

    assert dsym.filename == "Crashy.app.dSYM"
    assert dsym.uuids == {BinaryUUID.parse(CRASHY_UUID): binary}
    assert dsym.uuid_strings == {CRASHY_UUID}
    assert dsym.binary_paths == (binary,)
    assert dsym.slices[0].architecture is Architecture.X86_64


def test_load_failure_raises(tmp_path, fake_dumper):
    with pytest.raises(DSYMLoadError):
        DSYMFile.load(tmp_path / "nothing.dSYM", fake_dumper)


def test_silent_dumper_yields_empty_bundle(tmp_path):
    bundle = make_dsym(tmp_path, "Quiet.dSYM", "Quiet")
    dsym = DSYMFile.load(bundle, lambda path: ToolResult(("dwarfdump",)))
    assert dsym.uuids == {}


def test_dsym_files_single_bundle(crashy_dsym, fake_dumper):
    bundles = DSYMFile.dsym_files(crashy_dsym, fake_dumper)
    assert [b.filename for b in bundles] == ["Crashy.app.dSYM"]


def test_dsym_files_folder_of_bundles(tmp_path, fake_dumper):
    folder = tmp_path / "Crashy.app.dSYMs"
    folder.mkdir()
    app = make_dsym(folder, "Crashy.app.dSYM", "Crashy")
    kit = make_dsym(folder, "CrashyKit.framework.dSYM", "CrashyKit")
    (folder / "README.txt").write_text("not a bundle")
    fake_dumper.register(app, uuid_line(CRASHY_UUID, "x86_64", str(app / "Contents/Resources/DWARF/Crashy")))
    fake_dumper.register(kit, uuid_line(KIT_UUID, "x86_64", str(kit / "Contents/Resources/DWARF/CrashyKit")))

    bundles = DSYMFile.dsym_files(folder, fake_dumper)

    assert [b.filename for b in bundles] == ["Crashy.app.dSYM", "CrashyKit.framework.dSYM"]
    assert len({b.path for b in bundles}) == 2


def test_dsym_files_skips_broken_embedded_bundle(tmp_path, fake_dumper):
    folder = tmp_path / "bundles"
    folder.mkdir()
    good = make_dsym(folder, "Good.dSYM", "Good")
    make_dsym(folder, "Broken.dSYM", "Broken")
    fake_dumper.register(good, uuid_line(CRASHY_UUID, "arm64", str(good / "Contents/Resources/DWARF/Good")))

    assert [b.filename for b in DSYMFile.dsym_files(folder, fake_dumper)] == ["Good.dSYM"]


def test_dsym_files_missing_path(tmp_path, fake_dumper):
    assert DSYMFile.dsym_files(tmp_path / "gone", fake_dumper) == []


def test_discover_binary_paths_falls_back_to_bundle(tmp_path):
    bare = tmp_path / "Bare.dSYM"
    bare.mkdir()
    assert discover_binary_paths(bare) == (str(bare),)


def test_select_binary_by_name(crashy_dsym, fake_dumper):
    dsym = DSYMFile.load(crashy_dsym, fake_dumper)
    expected = str(crashy_dsym / "Contents/Resources/DWARF/Crashy")

    assert dsym.select_binary("Crashy") == expected
    assert dsym.select_binary("Crashy", BinaryUUID.parse(CRASHY_UUID), Architecture.X86_64) == expected
    assert dsym.select_binary("Other") is None


def test_select_binary_prefers_matching_slice(tmp_path):
    # two binaries sharing a last component in different folders
    slice_a = str(tmp_path / "a" / "Multi")
    slice_b = str(tmp_path / "b" / "Multi")
    slices = (
        DSYMSlice(BinaryUUID.parse(CRASHY_UUID), Architecture.X86_64, slice_a),
        DSYMSlice(BinaryUUID.parse(ARM_UUID), Architecture.ARM64, slice_b),
    )
    dsym = DSYMFile(
        path=tmp_path / "Multi.dSYM",
        filename="Multi.dSYM",
        uuids={s.uuid: s.binary_path for s in slices},
        slices=slices,
        binary_paths=(slice_a, slice_b),
    )

    assert dsym.select_binary("Multi", BinaryUUID.parse(ARM_UUID), Architecture.ARM64) == slice_b
    assert dsym.select_binary("Multi", BinaryUUID.parse(CRASHY_UUID), "x86_64") == slice_a
    # architecture mismatch falls back to the first name match
    assert dsym.select_binary("Multi", BinaryUUID.parse(ARM_UUID), Architecture.X86_64) == slice_a


def test_select_binary_is_deterministic(crashy_dsym, fake_dumper):
    dsym = DSYMFile.load(crashy_dsym, fake_dumper)
    picks = {dsym.select_binary("Crashy", BinaryUUID.parse(CRASHY_UUID), Architecture.X86_64) for _ in range(5)}
    assert len(picks) == 1


def test_equal_bundles_hash_alike(crashy_dsym, fake_dumper):
    a = DSYMFile.load(crashy_dsym, fake_dumper)
    b = DSYMFile.load(crashy_dsym, fake_dumper)
    assert a == b
    assert len({a, b}) == 1
