# SPDX-License-Identifier: MIT
"""Tests for pcmake.toolsets.msc."""

from pcmake.core.model import Configuration, Project, ProjectKind
from pcmake.toolsets.msc import MscToolset


def make_config(kind=ProjectKind.EXECUTABLE, **kwargs) -> Configuration:
    project = Project("app", kind)
    return project.add_configuration(Configuration("Debug", **kwargs))


class TestMscToolset:
    def test_creation(self):
        assert MscToolset().name == "msc"

    def test_library_name(self):
        msc = MscToolset()
        cfg = Configuration("Debug")
        assert msc.get_library_name(Project("core", ProjectKind.STATIC_LIBRARY), cfg) == "core.lib"
        assert msc.get_library_name(Project("dll", ProjectKind.SHARED_LIBRARY), cfg) == "dll.lib"

    def test_system_links_get_extension(self):
        cfg = make_config(links=["user32", "ws2_32.lib", "opengl32"])
        assert MscToolset().get_links(cfg) == ["user32.lib", "ws2_32.lib", "opengl32.lib"]

    def test_path_links_with_extension_kept(self):
        cfg = make_config(links=["third_party/zlib.lib"])
        assert MscToolset().get_links(cfg) == ["third_party/zlib.lib"]

    def test_default_flags(self):
        assert MscToolset().get_ldflags(make_config()) == ["/NOLOGO"]

    def test_debug_symbols(self):
        assert MscToolset().get_ldflags(make_config(symbols=True)) == ["/NOLOGO", "/DEBUG"]
        assert MscToolset().get_ldflags(make_config(symbols=False)) == ["/NOLOGO"]

    def test_machine(self):
        msc = MscToolset()
        assert msc.get_ldflags(make_config(architecture="x86")) == ["/NOLOGO", "/MACHINE:X86"]
        assert msc.get_ldflags(make_config(architecture="x86_64")) == [
            "/NOLOGO",
            "/MACHINE:X64",
        ]
        assert msc.get_ldflags(make_config(architecture="ARM64")) == [
            "/NOLOGO",
            "/MACHINE:ARM64",
        ]

    def test_dll_and_ltcg(self):
        cfg = make_config(ProjectKind.SHARED_LIBRARY, link_time_optimization=True)
        assert MscToolset().get_ldflags(cfg) == ["/NOLOGO", "/LTCG", "/DLL"]
