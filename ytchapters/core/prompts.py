timestamp_template = """
You are a smart assistant that generates clear, engaging YouTube timestamps from video transcripts.

Your task:

Read the full transcript and extract 5-10 meaningful segments or topic changes.

Assign each segment a concise title (under 60 characters) that accurately reflects the content.

Determine the exact timestamp (in mm:ss or h:mm:ss format) where each topic begins.

Ensure timestamps are spread throughout the video and not clustered at the beginning.

Avoid vague titles like "Topic 1" or "Discussion" - be specific and helpful to viewers.

Output format:

Return a JSON array of objects with the following format:

[
  {{"time": "0:00", "title": "Video Introduction"}},
  {{"time": "2:13", "title": "How the Algorithm Works"}},
  ...
]

Here's the transcript:
{transcript}
"""

summary_template = """
You are a helpful assistant that creates concise, informative summaries of YouTube videos.

I'll provide you with a video transcript. Your task is to:
1. Analyze the transcript and identify the main topics and key points
2. Create a comprehensive summary (300-500 words) that captures the essence of the video
3. Make the summary easy to read with clear paragraphs and structure

Here's the transcript:
{transcript}
"""
