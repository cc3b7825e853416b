from typing import Dict, List

SYSTEM_PROMPT = "You are a helpful assistant."
TASK_PROMPT = "Can you help create documentation and sample code of the following url?"
FORMAT_PROMPT = "The documentation is formatted as markdown."


def build_prompt(title: str, body: str) -> List[Dict[str, str]]:
    # The model output is sensitive to turn order; keep these five turns as-is.
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": TASK_PROMPT},
        {"role": "user", "content": FORMAT_PROMPT},
        {"role": "user", "content": f"The title of the article is {title}."},
        {"role": "user", "content": f"The article is as follows: \n{body}"},
    ]
