from typing import List
from unittest.mock import Mock

import pytest

from config import Config, FilterConfig, ModelConfig
from reviewbot.models import PRDetails, ReviewResult
from reviewbot.reviewers.base_reviewer import BaseReviewer

MODIFIED_JS_DIFF = """diff --git a/app.js b/app.js
index 83db48f..bf269f4 100644
--- a/app.js
+++ b/app.js
@@ -10,4 +10,5 @@ function main() {
 const a = 1;
-let b = 2;
+const b = [2];
+b.push(3);
 return a + b;
 }
"""

SECOND_JS_DIFF = """diff --git a/lib.js b/lib.js
index 3333333..4444444 100644
--- a/lib.js
+++ b/lib.js
@@ -1,2 +1,2 @@
-var x = 1;
+let x = 1;
 module.exports = x;
"""

MULTI_HUNK_JAVA_DIFF = """diff --git a/src/Service.java b/src/Service.java
index 1111111..2222222 100644
--- a/src/Service.java
+++ b/src/Service.java
@@ -1,3 +1,3 @@
 class Service {
-  int a;
+  long a;
 }
@@ -20,2 +20,3 @@ class Service {
 void run() {
+  log();
 }
"""

DELETED_JS_DIFF = """diff --git a/old.js b/old.js
deleted file mode 100644
index e69de29..0000000
--- a/old.js
+++ /dev/null
@@ -1,2 +0,0 @@
-var x = 1;
-var y = 2;
"""

ADDED_PY_DIFF = """diff --git a/foo.py b/foo.py
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ b/foo.py
@@ -0,0 +1,2 @@
+import os
+print(os.getcwd())
"""

MALFORMED_DIFF = """diff --git a/app.js b/app.js
index 83db48f..bf269f4 100644
--- a/app.js
+++ b/app.js
@@ -1,3 +1,3 @@
 const a = 1;
garbage line
"""


class FakeReviewer(BaseReviewer):
    """Returns queued results in call order and records the prompts it saw."""

    def __init__(self, results: List[ReviewResult]):
        super().__init__()
        self.results = list(results)
        self.prompts = []

    def review_prompt(self, prompt: str) -> ReviewResult:
        self.prompts.append(prompt)
        return self.results.pop(0)


@pytest.fixture
def pr_details():
    return PRDetails(
        owner="octo",
        repo="shop",
        pull_number=42,
        title="Refactor cart totals",
        description="Moves total calculation into a helper.",
    )


@pytest.fixture
def config():
    return Config(
        github_token="gh-token",
        model=ModelConfig(model="gpt-4o-mini", openai_api_key="sk-test"),
        filters=FilterConfig(),
    )


@pytest.fixture
def publisher():
    return Mock()
