"""
Event brief generation with Google Gemini.

The prompt carries only logistics; financial fields never leave the process.
"""

from __future__ import annotations

import logging

import google.generativeai as genai

from agenda.domain.entities import Event

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-flash"

UNAVAILABLE_MESSAGE = "Funcionalidade de IA indisponível (Chave API não encontrada ou erro de inicialização)."
CONNECTION_ERROR_MESSAGE = "Erro ao conectar com a IA. Verifique sua chave de API e conexão."
EMPTY_RESPONSE_MESSAGE = "Não foi possível gerar o resumo."


def build_prompt(event: Event, band_name: str) -> str:
    return f"""
Você é um assistente pessoal de uma banda. Crie um resumo curto, profissional e formatado para WhatsApp (com emojis) para enviar aos músicos sobre o seguinte evento.

Banda: {band_name}
Evento: {event.name}
Data: {event.date.strftime("%d/%m/%Y")}
Horário: {event.time}
Duração: {event.duration_hours:g} horas
Local: {event.venue}, {event.city}
Notas: {event.notes}
Status: {event.status}

Inclua informações logísticas importantes. Não inclua informações financeiras sensíveis (valor/comissão).
"""


class NullSummarizer:
    """Used when no API key is configured."""

    def summarize(self, event: Event, band_name: str) -> str:
        return UNAVAILABLE_MESSAGE


class GeminiSummarizer:
    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)
        logger.info(f"GeminiSummarizer initialized with model {model_name}")

    def summarize(self, event: Event, band_name: str) -> str:
        try:
            response = self.model.generate_content(build_prompt(event, band_name))
            text = (response.text or "").strip()
        except Exception as e:
            logger.error(f"Gemini request failed for event {event.id}: {e}")
            return CONNECTION_ERROR_MESSAGE
        return text or EMPTY_RESPONSE_MESSAGE


def build_summarizer(api_key: str | None, model_name: str = DEFAULT_MODEL) -> GeminiSummarizer | NullSummarizer:
    if not api_key:
        return NullSummarizer()
    try:
        return GeminiSummarizer(api_key, model_name)
    except Exception as e:
        logger.warning(f"Could not initialize Gemini, briefs disabled: {e}")
        return NullSummarizer()
