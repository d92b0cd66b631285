from shot2table.models import ChatMessage, ChatRequest, ContentPart, ImageUrl

DEFAULT_TABLE_PROMPT = (
    "Please analyze this screenshot and extract any table data you see. "
    "Return the data in JSON format with 'headers' array and 'rows' array "
    "(array of arrays). If no table is found, return empty arrays."
)
DEFAULT_IMAGE_MEDIA_TYPE = "image/jpeg"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.1


def build_image_data_uri(image_base64: str, media_type: str = DEFAULT_IMAGE_MEDIA_TYPE) -> str:
    return f"data:{media_type};base64,{image_base64}"


def build_table_request(
    model: str,
    image_base64: str,
    prompt: str = DEFAULT_TABLE_PROMPT,
) -> ChatRequest:
    """One user message: the instruction text followed by the inlined image."""
    return ChatRequest(
        model=model,
        messages=[
            ChatMessage(
                role="user",
                content=[
                    ContentPart(type="text", text=prompt),
                    ContentPart(
                        type="image_url",
                        image_url=ImageUrl(url=build_image_data_uri(image_base64)),
                    ),
                ],
            )
        ],
        max_tokens=DEFAULT_MAX_TOKENS,
        temperature=DEFAULT_TEMPERATURE,
    )
