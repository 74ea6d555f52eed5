from dotenv import load_dotenv
from enum import Enum
import argparse
import asyncio
import json
import logging
import os
import sys

import httpx
from pydantic import ValidationError

import config
from errors import SchemaValidationError, TransportError
from models import ComplianceIssue, ComplianceResult, IssueStatus, OverallStatus
from prompts import build_prompt
from report import export_pdf, format_report
from rules import get_rules
from text_parser import parse_text_response
from utils.base64_encodings import encode_image

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("overallStatus", "score", "issues", "summary")
ERROR_SUMMARY = "An error occurred while analyzing the image. Please check your connection and try again."


class ReductionPath(str, Enum):
    STRICT = "strict"
    FALLBACK = "fallback"
    HARD_FAILURE = "hard_failure"


def build_payload(prompt, image_base64, mime_type):
    return {
        "contents": [
            {
                "parts": [
                    {"text": prompt},
                    {
                        "inline_data": {
                            "mime_type": mime_type,
                            "data": image_base64,
                        }
                    },
                ]
            }
        ],
        "generationConfig": dict(config.GENERATION_CONFIG),
    }


def error_message_from_response(response):
    try:
        body = response.json()
    except ValueError:
        return "Unknown error"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return "Unknown error"


async def send_request(client, url, api_key, payload):
    """POST the payload once and return the decoded JSON body."""
    try:
        response = await client.post(url, params={"key": api_key}, json=payload)
    except httpx.HTTPError as e:
        raise TransportError(str(e) or e.__class__.__name__) from e

    if response.is_error:
        message = error_message_from_response(response)
        logger.error(f"Gemini API error ({response.status_code}): {message}")
        raise TransportError(f"Gemini API error: {message}", status_code=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise TransportError("Gemini API returned a body that is not JSON") from e


def extract_generated_text(body):
    try:
        return body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise TransportError("Gemini API response did not contain generated text") from e


def find_json_object(text):
    """
    Return the first balanced {...} region of text.

    Braces inside JSON string literals are ignored, so prose around the object
    and braces in the model's explanations do not confuse the scan.
    """
    start = text.find("{")
    if start == -1:
        raise SchemaValidationError("No JSON object found in model reply")

    while start != -1:
        end = balanced_end(text, start)
        if end is not None:
            return text[start:end]
        start = text.find("{", start + 1)

    raise SchemaValidationError("Unbalanced JSON object in model reply")


def balanced_end(text, start):
    """Index just past the brace closing the one at start, or None if it never closes."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def validate_compliance_json(data):
    if not isinstance(data, dict):
        raise SchemaValidationError("Model reply is not a JSON object")
    missing = [field for field in REQUIRED_FIELDS if field not in data]
    if missing:
        raise SchemaValidationError(f"Model reply is missing {', '.join(missing)}")
    if not data["overallStatus"]:
        raise SchemaValidationError("overallStatus is empty")
    score = data["score"]
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise SchemaValidationError("score is not a number")
    if not isinstance(data["issues"], list):
        raise SchemaValidationError("issues is not a list")
    if not data["summary"]:
        raise SchemaValidationError("summary is empty")


def parse_json_response(text):
    """Decode the model's JSON reply as-is; scores and statuses are not re-checked."""
    try:
        data = json.loads(find_json_object(text))
    except json.JSONDecodeError as e:
        raise SchemaValidationError(f"Invalid JSON in model reply: {e}") from e

    validate_compliance_json(data)
    try:
        return ComplianceResult.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in e.errors())
        logger.warning(
            f"Dropping model reply (overallStatus={data['overallStatus']!r}, score={data['score']!r}): invalid {fields}"
        )
        raise SchemaValidationError(f"Incomplete response format from Gemini API: invalid {fields}") from e


def reduce_response(text):
    """
    Turn the model's generated text into a ComplianceResult.

    Returns:
        tuple: (ReductionPath, ComplianceResult)
    """
    try:
        return ReductionPath.STRICT, parse_json_response(text)
    except SchemaValidationError as e:
        logger.warning(f"Error parsing Gemini response, falling back to text mining: {e}")
        return ReductionPath.FALLBACK, parse_text_response(text)


def error_result(error):
    message = str(error) or "Unknown error"
    return ComplianceResult(
        overall_status=OverallStatus.NON_COMPLIANT.value,
        score=0,
        issues=(
            ComplianceIssue(
                rule="API Error",
                description="Image analysis failed",
                status=IssueStatus.FAIL.value,
                details=f"Error: {message}",
            ),
        ),
        summary=ERROR_SUMMARY,
    )


async def request_analysis(image, mime_type, rules, api_key, model, client):
    image_base64, mime_type = await asyncio.to_thread(encode_image, image, mime_type)
    prompt = build_prompt(rules)
    payload = build_payload(prompt, image_base64, mime_type)
    url = config.get_endpoint(model)

    logger.info(f"Sending request to Gemini API ({model}, {mime_type})...")
    if client is None:
        async with httpx.AsyncClient() as owned_client:
            body = await send_request(owned_client, url, api_key, payload)
    else:
        body = await send_request(client, url, api_key, payload)
    logger.info("Received response from Gemini API")

    return reduce_response(extract_generated_text(body))


async def analyze(image, mime_type=None, *, rules=None, api_key=None, model=None, client=None):
    """
    Analyze a store image for compliance with the rule catalog.

    Never raises: network, encoding and unexpected failures come back as a
    non-compliant result with a single "API Error" issue.

    Args:
        image: path to the image, its raw bytes, or a binary file object
        mime_type (str): declared media type, detected when omitted
        rules: rule catalog, defaults to the built-in one
        api_key (str): Gemini API key, read from the environment when omitted
        model (str): Gemini model name, GEMINI_MODEL or the default when omitted
        client (httpx.AsyncClient): optional shared client, left open

    Returns:
        ComplianceResult
    """
    logger.info("Starting image analysis with Gemini...")
    try:
        if api_key is None:
            api_key = config.setup_environment()
        if model is None:
            model = config.get_model_name()
        if rules is None:
            rules = get_rules()

        path, result = await request_analysis(image, mime_type, rules, api_key, model, client)
        logger.info(f"Analysis finished via {path.value} path: {result.overall_status} ({result.score})")
        return result
    except Exception as e:
        logger.exception(f"Error analyzing image with Gemini API: {e}")
        logger.info(f"Analysis finished via {ReductionPath.HARD_FAILURE.value} path")
        return error_result(e)


def is_error_result(result):
    return any(issue.rule == "API Error" for issue in result.issues) and result.score == 0


async def analyze_images(images, mime_type=None, model=None):
    """Analyze each distinct image once, concurrently; returns {image: result}."""
    unique_images = list(dict.fromkeys(images))
    async with httpx.AsyncClient() as client:
        results = await asyncio.gather(
            *(analyze(image, mime_type, model=model, client=client) for image in unique_images)
        )
    return dict(zip(unique_images, results))


def pdf_path_for(base_path, image, image_count):
    """One report per image: report.pdf becomes report_<image name>.pdf when there are several."""
    if image_count == 1:
        return base_path
    stem, ext = os.path.splitext(base_path)
    name, _ = os.path.splitext(os.path.basename(image))
    return f"{stem}_{name}{ext or '.pdf'}"


def main(argv=None):
    parser = argparse.ArgumentParser(prog="Gemini retail compliance client")

    parser.add_argument("-i", "--image", required=True, action="append", help="path to input store image file (repeatable)")
    parser.add_argument("-m", "--model", required=False, type=str, choices=config.SUPPORTED_MODELS, default=None,
                        help="Gemini model to use (defaults to GEMINI_MODEL or " + config.DEFAULT_MODEL + ")")
    parser.add_argument("--mime-type", required=False, help="declared image media type, detected when omitted")
    parser.add_argument("--pdf", required=False, help="path of the PDF report to write")
    parser.add_argument("--json", action="store_true", help="print the result as JSON instead of a report")
    args = vars(parser.parse_args(argv))

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    # loading .env file
    load_dotenv()

    results = asyncio.run(analyze_images(args["image"], args["mime_type"], args["model"]))

    failed = False
    for image, result in results.items():
        if args["json"]:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            print(f"\n{image}")
            print(format_report(result))
        if args["pdf"]:
            output = pdf_path_for(args["pdf"], image, len(results))
            export_pdf(result, output)
            print(f"Saved PDF report: {output}")
        failed = failed or is_error_result(result)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
