from pathlib import Path

import pytest

FIRST_POST = """\
---
title: First Post
description: The first entry
date: 2024-06-01
---
# Hello World

![Cat](./media/cat.png)

```python
print('hi')
```
"""

PINNED_POST = """\
---
title: Pinned Post
description: Always on top
date: "2023-01-01"
pinned: true
---
Pinned body.
"""

DEPRECATED_POST = """\
---
title: Deprecated Post
description: Superseded
date: 2024-01-15
updated: 2020-01-01
deprecated: true
deprecation_note: "  Use the **new** guide  "
changelog:
  - date: 2024-02-01
    description: Fixed typos
  - date: "2024-03-10"
    description: " Added section "
---
Old body.
"""

OLD_POST = """\
---
title: Old Post
description: From the archive
date: 2022-03-04
archived: true
---
Old.
"""

OLDER_POST = """\
---
title: Older Post
description: Even older
date: 2021-01-01
archived: true
---
Older.
"""

ABOUT_PAGE = """\
---
title: About
---
# About me

![Me](./media/me.png)
"""


def write_entry(journal_root: Path, slug: str, text: str) -> Path:
    entry_dir = journal_root / slug
    entry_dir.mkdir(parents=True, exist_ok=True)
    path = entry_dir / "index.md"
    path.write_text(text, encoding="utf-8")
    return path


def build_site(project_root: Path) -> Path:
    content = project_root / "static" / "content"
    journal = content / "journal"
    pages = content / "pages"
    journal.mkdir(parents=True)
    pages.mkdir(parents=True)

    write_entry(journal, "first-post", FIRST_POST)
    write_entry(journal, "pinned-post", PINNED_POST)
    write_entry(journal, "deprecated-post", DEPRECATED_POST)
    write_entry(journal, "old-post", OLD_POST)
    write_entry(journal, "older-post", OLDER_POST)

    # Not entries: a loose file, an empty directory, a directory without index.md
    (journal / "README.md").write_text("# not an entry", encoding="utf-8")
    (journal / "empty").mkdir()
    (journal / "foo").mkdir()
    (journal / "foo" / "notes.md").write_text("---\ntitle: Foo\n---\n", encoding="utf-8")

    (pages / "about.md").write_text(ABOUT_PAGE, encoding="utf-8")
    return content


@pytest.fixture
def project(tmp_path):
    """A project root with a populated static/content tree."""
    build_site(tmp_path)
    return tmp_path


@pytest.fixture
def content_root(project):
    return project / "static" / "content"


@pytest.fixture
def entry_writer():
    return write_entry
