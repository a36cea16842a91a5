import csv
from io import StringIO, BytesIO
from typing import List, Dict, Any, Optional
from fastapi.responses import StreamingResponse
import asyncio

async def generate_csv_from_data(
    data: List[Dict[str, Any]],
    headers: List[str],
    filename: str = "export.csv",
    preamble: Optional[List[str]] = None
) -> StreamingResponse:
    """
    Generate a CSV file from a list of dictionaries

    Args:
        data: List of dictionaries containing the data
        headers: List of header names to include in the CSV
        filename: Name of the CSV file to be downloaded
        preamble: Optional metadata row written before the header row

    Returns:
        StreamingResponse: A FastAPI StreamingResponse with the CSV content
    """
    # Use a separate thread for CPU-bound CSV generation
    csv_content = await asyncio.to_thread(_generate_csv_content, data, headers, preamble)

    buffer = BytesIO(csv_content.encode("utf-8"))

    return StreamingResponse(
        buffer,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

def _generate_csv_content(
    data: List[Dict[str, Any]],
    headers: List[str],
    preamble: Optional[List[str]] = None
) -> str:
    """
    Generate CSV content from data (synchronous helper function)
    """
    output = StringIO()
    writer = csv.writer(output)

    if preamble:
        writer.writerow(preamble)

    writer.writerow(headers)

    for item in data:
        row = []
        for header in headers:
            value = item.get(header, "")
            # Handle lists by joining them
            if isinstance(value, list):
                value = ",".join(str(v) for v in value)
            row.append(str(value) if value is not None else "")
        writer.writerow(row)

    content = output.getvalue()
    output.close()

    return content
