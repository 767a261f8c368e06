"""End-to-end check of the annotation -> diagnostics -> comparison pipeline."""
from expectdiag import check_file

SOURCE = """\
fn main() {
    let a: i32 = "one";
    //~^ ERROR mismatched types
    //~| NOTE expected `i32`
    let unused = 3; //~ WARN unused variable
    //[strict]~^ ERROR unused variable
}
"""

STDERR = """\
warning: unused variable: `unused`
 --> pipeline.rs:5:9

error[E0308]: mismatched types
 --> pipeline.rs:2:18
  |
2 |     let a: i32 = "one";
  |            ---   ^^^^^ expected `i32`, found `&str`

error: aborting due to 1 previous error
"""


def test_default_revision(tmp_path):
    path = tmp_path / "pipeline.rs"
    path.write_text(SOURCE)
    result = check_file(str(path), STDERR)
    # the note is only rendered in the source snippet, never as its own diagnostic
    assert [e.kind for e in result.not_found] == ["note"]
    assert len(result.matched) == 2
    assert result.unexpected == []


def test_strict_revision(tmp_path):
    path = tmp_path / "pipeline.rs"
    path.write_text(SOURCE)
    stderr = "pipeline.rs:5:9: error: unused variable: `unused`\n"
    result = check_file(str(path), stderr, cfg="strict")
    assert result.passed
