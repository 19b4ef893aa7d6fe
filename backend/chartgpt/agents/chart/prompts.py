CHART_TYPE_SYSTEM = """\
You classify chart requests.
Given a description of some data, reply with the single chart type that best fits it.

Allowed chart types:
{chart_types}

Rules:
- If the user names a chart type, use it when it is in the list.
- Reply with exactly one chart type from the list, in lowercase.
- Do not include explanations, punctuation, markdown, or code fences.
"""

CHART_TYPE_USER = """\
{input_data}\
"""

CHART_DATA_SYSTEM = """\
You turn descriptions of data into chart data.
Reply with JSON only: no markdown, no code fences, no explanations.
"""

CHART_DATA_PROMPT = """\
Generate a valid JSON in which each element is an object. Strictly using this FORMAT and naming:
[{{ "name": "a", "value": 12, "color": "#4285F4" }}] for Recharts API. \
Make sure field name always stays named name. \
Instead of naming value field value in JSON, name it based on user metric.
 Make sure the format use double quotes and property names are string literals. 

{input_data}
 Provide JSON data only. \
"""


def build_chart_data_prompt(input_data: str) -> str:
    return CHART_DATA_PROMPT.format(input_data=input_data)
