import pytest


def _t(type_: str, *inner: dict, name: str | None = None) -> dict:
    out: dict = {"type": type_}
    if inner:
        out["inner"] = list(inner)
    if name is not None:
        out["name"] = name
    return out


def _sample_scan() -> dict:
    # Scanner output for the `Sample` interface used across the tests.
    return {
        "package": "main",
        "imports": [
            {"path": "bytes"},
            {"path": "encoding/base64"},
            {"path": "flag"},
            {"path": "fmt"},
            {"path": "github.com/zpatrick/go-parser"},
            {"path": "os"},
            {"path": "strings"},
        ],
        "interfaces": [
            {
                "name": "Sample",
                "embeds": [],
                "methods": [
                    {"name": "Do", "params": [], "results": []},
                    {"name": "Maybe", "params": [], "results": [_t("error")]},
                    {
                        "name": "Repeat",
                        "params": [_t("string", name="s"), _t("string", name="t"), _t("string", name="v")],
                        "results": [],
                    },
                    {
                        "name": "Arg1",
                        "params": [
                            _t("string", name="t"),
                            _t("func(*int)", _t("*int", _t("int")), name="f"),
                        ],
                        "results": [_t("error", name="e")],
                    },
                    {
                        "name": "Out1",
                        "params": [
                            _t("[]byte", _t("byte")),
                            _t("map[string]func() int", _t("string"), _t("func() int", _t("int"))),
                        ],
                        "results": [_t("string"), _t("error")],
                    },
                    {
                        "name": "Complex",
                        "params": [_t("**OtherString", _t("*OtherString", _t("OtherString")))],
                        "results": [_t("*[]SampleStruct", _t("[]SampleStruct", _t("SampleStruct"))), _t("error")],
                    },
                    {
                        "name": "Remote",
                        "params": [_t("os.File")],
                        "results": [
                            _t("[]strings.Reader", _t("strings.Reader")),
                            _t("*os.File", _t("os.File")),
                            _t("error"),
                        ],
                    },
                    {
                        "name": "Interface",
                        "params": [_t("interface{}", name="anything")],
                        "results": [_t("string")],
                    },
                    {
                        "name": "Range",
                        "params": [
                            _t("string", name="format"),
                            _t("...interface{}", _t("interface{}"), name="args"),
                        ],
                        "results": [],
                    },
                    {"name": "Prefix", "params": [_t("base64.Encoding")], "results": [_t("error")]},
                ],
            },
            {"name": "Other", "embeds": [], "methods": []},
        ],
    }


@pytest.fixture
def sample_scan() -> dict:
    return _sample_scan()


@pytest.fixture
def sample_file():
    from godeco.model import GoFile

    return GoFile.from_scan(_sample_scan(), path="sample.go")


@pytest.fixture
def sample_iface(sample_file):
    return sample_file.find_interface("Sample")
