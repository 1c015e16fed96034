#!/usr/bin/env python3

from reviewbot.models import ChangedFile, Hunk, PRDetails


def render_changes(hunk: Hunk) -> str:
    """
    Renders every line of the hunk prefixed with its line number.

    Added and context lines use their position in the new file, removed lines
    their position in the old file.
    """
    return "\n".join(f"{change.line_number} {change.text}" for change in hunk.changes)


def create_prompt(changed_file: ChangedFile, hunk: Hunk, pr_details: PRDetails) -> str:
    """
    Creates the prompt for one hunk of a file.

    Args:
        changed_file: File the hunk belongs to
        hunk: Hunk from the diff
        pr_details: Pull request details

    Returns:
        Prompt string for the model
    """
    return f"""Your task is to review pull requests. Instructions:
- Provide the response in following JSON format:  {{"reviews": [{{"lineNumber":  <line_number>, "reviewComment": "<review comment>"}}]}}
- Do not give positive comments or compliments.
- Provide comments and suggestions ONLY if there is something to improve, otherwise "reviews" should be an empty array.
- Write the comment in GitHub Markdown format.
- Use the given description only for the overall context and only comment the code.
- IMPORTANT: NEVER suggest adding comments to the code.

Review the following code diff in the file "{changed_file.target_path}" and take the pull request title and description into account when writing the response.

Pull request title: {pr_details.title}
Pull request description:

---
{pr_details.description}
---

Git diff to review:

```diff
{hunk.raw_content}
{render_changes(hunk)}
```
"""
