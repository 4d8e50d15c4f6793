# SPDX-License-Identifier: MIT
"""Tests for CMakeGenerator and CMakeProjectWriter."""

import io
from pathlib import Path

import pytest

from pcmake.core.errors import UnknownToolsetError, UnmappedDialectError
from pcmake.core.filesystem import LocalFileSystem
from pcmake.core.model import Configuration, PicMode, Project, ProjectKind
from pcmake.generators.cmake import CMakeGenerator, CMakeProjectWriter


def render(project: Project, **kwargs) -> str:
    f = io.StringIO()
    CMakeProjectWriter(f, **kwargs).write(project)
    return f.getvalue()


def make_project(tmp_path: Path, kind=ProjectKind.EXECUTABLE, name="app") -> Project:
    return Project(name, kind, base_dir=tmp_path, location=tmp_path)


def block(output: str, command: str) -> list[str]:
    """Lines between 'command(' and the closing ')', stripped."""
    lines = output.splitlines()
    start = next(i for i, line in enumerate(lines) if line.startswith(f"{command}("))
    end = lines.index(")", start)
    return [line.strip() for line in lines[start + 1 : end]]


class TestDeclaration:
    def test_static_library(self, tmp_path):
        project = make_project(tmp_path, ProjectKind.STATIC_LIBRARY, "core")
        output = render(project)
        first = output.splitlines()[0]
        assert first == 'add_library("core"'
        assert "SHARED" not in first

    def test_shared_library(self, tmp_path):
        project = make_project(tmp_path, ProjectKind.SHARED_LIBRARY, "plugin")
        assert render(project).splitlines()[0] == 'add_library("plugin" SHARED'

    def test_executable(self, tmp_path):
        project = make_project(tmp_path, ProjectKind.EXECUTABLE, "app")
        assert render(project).splitlines()[0] == 'add_executable("app"'

    def test_source_files(self, tmp_path):
        project = make_project(tmp_path)
        project.files.extend(["src/main.cpp", "src/util.cpp", "include/util.h"])
        output = render(project)
        assert output.startswith(
            'add_executable("app"\n'
            '\t"src/main.cpp"\n'
            '\t"src/util.cpp"\n'
            '\t"include/util.h"\n'
            ")\n"
        )

    def test_no_configurations(self, tmp_path):
        project = make_project(tmp_path)
        assert render(project) == 'add_executable("app"\n)\n'


class TestDependencies:
    def test_no_dependencies(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug"))
        assert "add_dependencies" not in render(project)

    def test_dependencies_in_order(self, tmp_path):
        project = make_project(tmp_path)
        project.add_dependency(make_project(tmp_path, ProjectKind.STATIC_LIBRARY, "X"))
        project.add_dependency(make_project(tmp_path, ProjectKind.STATIC_LIBRARY, "Y"))
        project.add_configuration(Configuration("Debug"))
        project.add_configuration(Configuration("Release"))

        output = render(project)
        assert block(output, "add_dependencies") == ['"X"', '"Y"']
        # Emitted once per project, not per configuration
        assert output.count("add_dependencies") == 1
        assert output.index("add_dependencies") < output.index("set_target_properties")


class TestConfigurationBlocks:
    def test_output_directories(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", output_dir="bin/Debug"))
        output = render(project)
        assert (
            'set_target_properties("app" PROPERTIES\n'
            '\tARCHIVE_OUTPUT_DIRECTORY "bin/Debug"\n'
            '\tLIBRARY_OUTPUT_DIRECTORY "bin/Debug"\n'
            '\tRUNTIME_OUTPUT_DIRECTORY "bin/Debug"\n'
            ")\n"
        ) in output

    def test_empty_blocks_omitted(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", toolset="gcc"))
        output = render(project)
        for command in (
            "target_include_directories",
            "target_compile_definitions",
            "target_link_directories",
            "target_link_libraries",
            "target_link_options",
            "target_precompile_headers",
            "CXX_STANDARD",
        ):
            assert command not in output

    def test_guarded_entries_in_order(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(
            Configuration(
                "Debug",
                include_dirs=["include", "third_party/include"],
                defines=["DEBUG", "TRACE=1"],
                lib_dirs=["lib", "/opt/lib"],
                links=["m", "dl"],
                link_options=["-rdynamic"],
                toolset="gcc",
            )
        )
        output = render(project)

        assert block(output, "target_include_directories") == [
            "$<$<CONFIG:Debug>:include>",
            "$<$<CONFIG:Debug>:third_party/include>",
        ]
        assert block(output, "target_compile_definitions") == [
            "$<$<CONFIG:Debug>:DEBUG>",
            "$<$<CONFIG:Debug>:TRACE=1>",
        ]
        assert block(output, "target_link_directories") == [
            "$<$<CONFIG:Debug>:lib>",
            "$<$<CONFIG:Debug>:/opt/lib>",
        ]
        assert block(output, "target_link_libraries") == [
            "$<$<CONFIG:Debug>:m>",
            "$<$<CONFIG:Debug>:dl>",
        ]
        assert block(output, "target_link_options") == ["$<$<CONFIG:Debug>:-rdynamic>"]

    def test_block_order(self, tmp_path):
        (tmp_path / "pch.h").write_text("")
        project = make_project(tmp_path)
        project.add_configuration(
            Configuration(
                "Debug",
                include_dirs=["inc"],
                defines=["D"],
                lib_dirs=["lib"],
                links=["m"],
                link_options=["-g"],
                dialect="C++17",
                pch_header="pch.h",
                toolset="gcc",
            )
        )
        output = render(project)
        positions = [
            output.index(marker)
            for marker in (
                "set_target_properties",
                "target_include_directories",
                "target_compile_definitions",
                "target_link_directories",
                "target_link_libraries",
                "target_link_options",
                "CXX_STANDARD",
                "target_precompile_headers",
            )
        ]
        assert positions == sorted(positions)

    def test_define_with_space_escaped(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(
            Configuration("Release", defines=["GREETING=Hello World"])
        )
        output = render(project)
        assert "\t$<$<CONFIG:Release>:GREETING=Hello\\ World>\n" in output

    def test_link_paths_made_absolute(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(
            Configuration("Debug", links=["libs/foo.a", "pthread"], toolset="gcc")
        )
        output = render(project)
        foo = (tmp_path / "libs" / "foo.a").as_posix()
        assert block(output, "target_link_libraries") == [
            f"$<$<CONFIG:Debug>:{foo}>",
            "$<$<CONFIG:Debug>:pthread>",
        ]

    def test_sibling_library_link(self, tmp_path):
        core = Project(
            "core", ProjectKind.STATIC_LIBRARY, base_dir=tmp_path, location=tmp_path / "core"
        )
        core.add_configuration(Configuration("Debug", output_dir="bin"))
        app = Project("app", base_dir=tmp_path, location=tmp_path / "app")
        app.add_dependency(core)
        app.add_configuration(Configuration("Debug", links=["core"], toolset="gcc"))

        output = render(app)
        expected = (tmp_path / "core" / "bin" / "libcore.a").as_posix()
        assert block(output, "target_link_libraries") == [f"$<$<CONFIG:Debug>:{expected}>"]

    def test_link_options_then_toolset_flags(self, tmp_path):
        project = make_project(tmp_path, ProjectKind.SHARED_LIBRARY, "plugin")
        project.add_configuration(
            Configuration("Release", link_options=["-Wl,--as-needed"], symbols=False, toolset="gcc")
        )
        output = render(project)
        assert block(output, "target_link_options") == [
            "$<$<CONFIG:Release>:-Wl$<COMMA>--as-needed>",
            "$<$<CONFIG:Release>:-s>",
            "$<$<CONFIG:Release>:-shared>",
            "$<$<CONFIG:Release>:-Wl$<COMMA>-soname=libplugin.so>",
        ]

    def test_multiple_configurations_in_order(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Release", defines=["NDEBUG"]))
        project.add_configuration(Configuration("Debug", defines=["DEBUG"]))
        output = render(project)
        assert output.index("$<$<CONFIG:Release>:NDEBUG>") < output.index(
            "$<$<CONFIG:Debug>:DEBUG>"
        )
        assert output.count("target_compile_definitions") == 2


class TestStandardBlock:
    def test_cpp17(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", dialect="C++17"))
        output = render(project)
        assert (
            "if(CMAKE_BUILD_TYPE STREQUAL Debug)\n"
            '\tset_target_properties("app" PROPERTIES\n'
            "\t\tCXX_STANDARD 17\n"
            "\t\tCXX_STANDARD_REQUIRED YES\n"
            "\t\tCXX_EXTENSIONS NO\n"
            "\t\tPOSITION_INDEPENDENT_CODE False\n"
            "\t)\n"
            "endif()\n"
        ) in output

    def test_gnu_with_pic(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(
            Configuration("Release", dialect="gnu++14", pic=PicMode.ON)
        )
        output = render(project)
        assert "\t\tCXX_STANDARD 14\n" in output
        assert "\t\tCXX_EXTENSIONS YES\n" in output
        assert "\t\tPOSITION_INDEPENDENT_CODE True\n" in output

    def test_pic_off(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", dialect="C++11", pic=PicMode.OFF))
        assert "POSITION_INDEPENDENT_CODE False" in render(project)

    def test_empty_dialect(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", pic=PicMode.ON))
        output = render(project)
        assert "CMAKE_BUILD_TYPE" not in output
        assert "CXX_STANDARD" not in output

    def test_unmapped_dialect_fails_before_output(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", dialect="C++2b"))
        f = io.StringIO()
        with pytest.raises(UnmappedDialectError):
            CMakeProjectWriter(f).write(project)
        assert "set_target_properties" not in f.getvalue()


class TestPchBlock:
    def test_found_header(self, tmp_path):
        (tmp_path / "include").mkdir()
        (tmp_path / "include" / "pch.h").write_text("")
        project = make_project(tmp_path)
        project.add_configuration(
            Configuration("Debug", include_dirs=["include"], pch_header="pch.h")
        )
        output = render(project)
        assert (
            "if(CMAKE_BUILD_TYPE STREQUAL Debug)\n"
            '\ttarget_precompile_headers("app" PUBLIC include/pch.h)\n'
            "endif()\n"
        ) in output

    def test_missing_header_uses_absolute_path(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", pch_header="stdafx.h"))
        output = render(project, fs=LocalFileSystem(cwd=tmp_path / "cwd"))
        expected = (tmp_path / "cwd" / "stdafx.h").as_posix()
        assert f'target_precompile_headers("app" PUBLIC {expected})' in output

    def test_disabled(self, tmp_path):
        (tmp_path / "pch.h").write_text("")
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", pch=False, pch_header="pch.h"))
        assert "target_precompile_headers" not in render(project)


class TestToolsetSelection:
    def test_unknown_toolset(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", toolset="borland"))
        with pytest.raises(UnknownToolsetError):
            render(project)

    def test_override(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", toolset="gcc"))
        output = render(project, toolset="msc")
        assert "$<$<CONFIG:Debug>:/NOLOGO>" in output

    def test_default_toolset_is_clang(self, tmp_path):
        project = make_project(tmp_path, ProjectKind.SHARED_LIBRARY, "plugin")
        project.add_configuration(Configuration("Debug", system="macosx"))
        assert "-dynamiclib" in render(project)


class TestCMakeGenerator:
    def test_generator_creation(self):
        gen = CMakeGenerator()
        assert gen.name == "cmake"

    def test_generate_files(self, tmp_path):
        core = make_project(tmp_path, ProjectKind.STATIC_LIBRARY, "core")
        core.add_configuration(Configuration("Debug"))
        app = make_project(tmp_path, ProjectKind.EXECUTABLE, "app")
        app.add_dependency(core)
        app.add_configuration(Configuration("Debug"))

        out_dir = tmp_path / "build"
        written = CMakeGenerator(workspace="demo").generate([core, app], out_dir)

        assert written == [
            out_dir / "core.cmake",
            out_dir / "app.cmake",
            out_dir / "CMakeLists.txt",
        ]
        assert (out_dir / "core.cmake").read_text().startswith('add_library("core"')
        assert (out_dir / "CMakeLists.txt").read_text() == (
            "cmake_minimum_required(VERSION 3.16)\n"
            'project("demo")\n'
            'include("core.cmake")\n'
            'include("app.cmake")\n'
        )

    def test_workspace_name_defaults_to_first_project(self, tmp_path):
        gen = CMakeGenerator()
        text = gen.render_workspace([make_project(tmp_path, name="first")])
        assert 'project("first")' in text

    def test_without_workspace(self, tmp_path):
        project = make_project(tmp_path)
        written = CMakeGenerator(write_workspace=False).generate([project], tmp_path / "out")
        assert written == [tmp_path / "out" / "app.cmake"]
        assert not (tmp_path / "out" / "CMakeLists.txt").exists()

    def test_failing_project_writes_nothing(self, tmp_path):
        good = make_project(tmp_path, name="good")
        good.add_configuration(Configuration("Debug"))
        bad = make_project(tmp_path, name="bad")
        bad.add_configuration(Configuration("Debug", toolset="nope"))

        out_dir = tmp_path / "build"
        with pytest.raises(UnknownToolsetError):
            CMakeGenerator().generate([good, bad], out_dir)

        assert (out_dir / "good.cmake").exists()
        assert not (out_dir / "bad.cmake").exists()
        assert not (out_dir / "CMakeLists.txt").exists()

    def test_generator_toolset_override(self, tmp_path):
        project = make_project(tmp_path)
        project.add_configuration(Configuration("Debug", toolset="nope"))
        text = CMakeGenerator(toolset="gcc").render_project(project)
        assert 'add_executable("app"' in text
