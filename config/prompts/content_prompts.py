BRAND_IDENTITY_HEADER = """

**Strategic brand identity profile (deep analysis):**
Use this profile as the primary, exact reference for every word you write. The content must align fully with this identity.
"""

AUDIENCE_PERSONA_LINE = "- **Target audience persona:** {persona}\n"
CONTENT_PILLARS_LINE = "- **Core content pillars:** {pillars}\n"
KEYWORDS_TO_USE_LINE = "- **Words to use (reinforce the identity):** {keywords}\n"
KEYWORDS_TO_AVOID_LINE = "- **Words to avoid (protect the identity):** {keywords}\n"
SUCCESS_EXAMPLES_LINE = "- **Successful examples (learn from this style):**\n{examples}\n"
SUCCESS_EXAMPLE_ITEM = '  - "{example}"'

SOCIAL_POSTS_PROMPT = """You are an expert digital content marketing strategist who also specialises in visual arts. Your task is to create {count} complete content pieces (text + visual inspiration) for a brand.

**Brand details:**
- **Description:** {description}
{identity}

**Task details:**
- **Target platform:** {platform}
- **Required tone of voice:** {tone}
- **Required content type:** {content_type}
- **Specific topic:** {topic}
- **Language/dialect:** {language}

**Platform guidelines:**
{platform_guidelines}

**Task:**
For each of the {count} content pieces, create the following with great precision, based on the brand identity profile:
1. **Content text (text):** complete, creative and engaging text. Include relevant hashtags where they suit the platform.
2. **Tone-of-voice design phrase (tov_phrase):** a very short phrase for the designer to use in the design (example: "Quality in every cup").
3. **Visual inspiration (visual_inspiration):** an object with three elements to help the designer:
    * **description:** a detailed, inventive description of the image or video that fits the text and identity. Be specific about elements, lighting and angle.
    * **color_palette:** an array of 3-4 suggested HEX color codes that match the design and identity (example: ["#6F4E37", "#D2B48C", "#F5F5DC"]).
    * **image_prompt:** a professional, ready-to-use prompt for AI image tools such as Midjourney or DALL-E. It must be in English, detailed and technical.

Make sure all text (except image_prompt) is in the specified language/dialect: {language}.

Return JSON structure:
{{
  "posts": [
    {{
      "text": "Full content text",
      "tov_phrase": "Short design phrase",
      "visual_inspiration": {{
        "description": "Suggested image/video",
        "color_palette": ["#000000", "#FFFFFF", "#CCCCCC"],
        "image_prompt": "English image-generation prompt"
      }}
    }}
  ]
}}"""

CAMPAIGN_PROMPT = """You are an expert campaign marketing strategist and creative director. Your task is to create a complete content plan for a brand's marketing campaign, based on a specific goal and a strategic identity.

**Brand details:**
- **Description:** {description}
{identity}

**Campaign details:**
- **Goal:** {goal} ({goal_description})
- **Duration:** {duration} days
- **Topic/brief:** {topic}
- **Primary platform:** {platform}
- **Overall campaign tone:** {tone}
- **Language/dialect:** {language}

**Task:**
Generate a coherent, day-by-day content plan for a campaign lasting {duration} days. For each day, provide a complete post with text and visual inspiration. The posts must build on each other to achieve the campaign goal and stay fully within the brand identity profile.

For each day, create one object with this structure:
1. **day (number):** the day number in the campaign (1, 2, 3...).
2. **theme (string):** a short theme or title for the day's post (example: "Teaser", "The big reveal", "Customer testimonial").
3. **text (string):** the full, creative and engaging post text. Include relevant hashtags.
4. **tov_phrase (string):** a very short phrase for the designer to use in the visual design.
5. **visual_inspiration (object):** three elements to guide the designer:
    * **description (string):** a detailed, inventive description of the image or video.
    * **color_palette (array of strings):** 3-4 suggested HEX color codes.
    * **image_prompt (string):** a professional, detailed, technical English prompt for AI image tools.

Make sure all text (except image_prompt) is in the specified language/dialect: {language}.

Return JSON structure:
{{
  "campaignPosts": [
    {{
      "day": 1,
      "theme": "Day theme",
      "text": "Full post text",
      "tov_phrase": "Short design phrase",
      "visual_inspiration": {{
        "description": "Suggested image/video",
        "color_palette": ["#000000", "#FFFFFF", "#CCCCCC"],
        "image_prompt": "English image-generation prompt"
      }}
    }}
  ]
}}"""

TOPIC_IDEAS_PROMPT = """Based on the following brand description, suggest 5 creative content topic ideas.
**Description:** "{description}"
**Required language:** {language}
The ideas must be concise and suitable for social media.

Return JSON structure:
{{
  "ideas": ["Idea 1", "Idea 2", "Idea 3", "Idea 4", "Idea 5"]
}}"""

REFINE_POST_PROMPT = """**Task:** {instruction}
**Original text:** "{text}"
**Required language/dialect:** {language}
Return only the revised text."""

HASHTAGS_PROMPT = """Based on the following post text, suggest 5 relevant and suitable hashtags.
**Post text:** "{text}"
**Required language/dialect:** {language}

Return JSON structure:
{{
  "hashtags": ["#one", "#two", "#three", "#four", "#five"]
}}"""

TAGLINE_PROMPT = """You are a creative director. Based on the following post text and brand description, generate one concise, inspiring phrase (3-5 words) for a graphic designer to use in the design.
This phrase is called a "tone-of-voice design phrase".

**Brand description:** "{description}"
**Post text:** "{text}"

**Required language:** {language}

Return only the phrase as raw text, without any extra formatting or quotation marks."""
