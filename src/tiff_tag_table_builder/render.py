"""生成コード（Rust の静的タグテーブル）の組み立て.

出力はマーカー行・生成日時コメント・lazy_static ブロックの順。
タイムスタンプ行以外は入力が同じなら毎回バイト単位で同一になる（ID昇順で出力）。
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime

from tiff_tag_table_builder.core.records import TagRecord

MARKER = "// Auto-generated code below"

_RUST_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def rust_string(text: str) -> str:
    """Rust の文字列リテラルとして安全な形にエスケープし、引用符で囲む.

    Examples:
        >>> rust_string('Say "hi"')
        '"Say \\\\"hi\\\\""'
    """
    out = []
    for ch in text:
        if ch in _RUST_ESCAPES:
            out.append(_RUST_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def render_insert(record: TagRecord) -> str:
    ifd = "true" if record.ifd else "false"
    return (
        f"        m.insert({record.id}, Tag {{id: {record.id}, ifd: {ifd}, "
        f"label: String::from({rust_string(record.label)}), "
        f"description: String::from({rust_string(record.description)})}});"
    )


def render_rust_table(
    tags: Mapping[int, TagRecord],
    generated_at: datetime | None = None,
    marker: str = MARKER,
) -> str:
    """確定済みタグから生成コード片を作る.

    Args:
        tags: finalize() 済み（ifd 確定）のタグ辞書
        generated_at: 生成日時（省略時は現在のUTC時刻）
        marker: 先頭に置くマーカー行

    Returns:
        改行1つで終わる生成コード片
    """
    if generated_at is None:
        generated_at = datetime.now(UTC)

    lines = [
        marker,
        f"// Generated at {generated_at.isoformat(timespec='seconds')}",
        "",
        "lazy_static! {",
        "    pub static ref TAGS: HashMap<u16, Tag> = {",
        "        let mut m = HashMap::new();",
    ]
    lines.extend(render_insert(tags[tag_id]) for tag_id in sorted(tags))
    lines.extend(
        [
            "        m",
            "    };",
            "}",
        ]
    )
    return "\n".join(lines) + "\n"
