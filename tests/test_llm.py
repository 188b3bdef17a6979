"""
Ollama generation with the client mocked out.
"""

from unittest.mock import patch

import ollama

from promptlab.llm.generator import GenerationResult, OllamaGenerator, check_ollama_health


class TestOllamaGenerator:
    """Generation results and error capture."""

    @patch('promptlab.llm.generator.ollama.chat')
    def test_generate_success(self, mock_chat):
        mock_chat.return_value = {'message': {'role': 'assistant', 'content': 'Paris.'}}

        generator = OllamaGenerator(model_name='test-model', temperature=0.2)
        result = generator.generate('What is the capital of France?')

        assert isinstance(result, GenerationResult)
        assert result.ok
        assert result.content == 'Paris.'
        assert result.model_used == 'test-model'
        assert result.error is None

        kwargs = mock_chat.call_args.kwargs
        assert kwargs['model'] == 'test-model'
        assert kwargs['messages'] == [{'role': 'user', 'content': 'What is the capital of France?'}]
        assert kwargs['options']['temperature'] == 0.2

    @patch('promptlab.llm.generator.ollama.chat')
    def test_options_override_defaults(self, mock_chat):
        mock_chat.return_value = {'message': {'content': 'ok'}}

        OllamaGenerator(model_name='m').generate('prompt', {'temperature': 0.0, 'num_predict': 50})

        options = mock_chat.call_args.kwargs['options']
        assert options['temperature'] == 0.0
        assert options['num_predict'] == 50
        assert options['top_p'] == 0.9

    @patch('promptlab.llm.generator.ollama.chat')
    def test_response_error_captured(self, mock_chat):
        mock_chat.side_effect = ollama.ResponseError('model not found')

        result = OllamaGenerator(model_name='missing').generate('prompt')

        assert not result.ok
        assert result.content == ''
        assert 'Ollama model error' in result.error
        assert 'model not found' in result.error

    @patch('promptlab.llm.generator.ollama.chat')
    def test_connection_error_captured(self, mock_chat):
        mock_chat.side_effect = ConnectionError('refused')

        result = OllamaGenerator(model_name='m').generate('prompt')

        assert result.error == 'Generation failed: refused'
        assert result.to_dict()['error'] == 'Generation failed: refused'

    @patch('promptlab.llm.generator.ollama.chat')
    def test_empty_content(self, mock_chat):
        mock_chat.return_value = {'message': {'content': None}}
        assert OllamaGenerator(model_name='m').generate('prompt').content == ''


class TestHealth:
    """Model availability check."""

    @patch('promptlab.llm.generator.ollama.list')
    def test_model_available(self, mock_list):
        mock_list.return_value = {'models': [{'model': 'llama3.2:latest'}, {'name': 'other:latest'}]}
        assert check_ollama_health('llama3.2:latest') is True
        assert check_ollama_health('other:latest') is True

    @patch('promptlab.llm.generator.ollama.list')
    def test_model_missing(self, mock_list):
        mock_list.return_value = {'models': []}
        assert check_ollama_health('llama3.2:latest') is False

    @patch('promptlab.llm.generator.ollama.list')
    def test_unreachable(self, mock_list):
        mock_list.side_effect = ConnectionError('refused')
        assert check_ollama_health('llama3.2:latest') is False


class TestJsonFormat:
    """Ollama's JSON output mode."""

    @patch('promptlab.llm.generator.ollama.chat')
    def test_format_passed_when_requested(self, mock_chat):
        mock_chat.return_value = {'message': {'content': '{}'}}

        OllamaGenerator(model_name='m').generate('prompt', response_format='json')

        assert mock_chat.call_args.kwargs['format'] == 'json'

    @patch('promptlab.llm.generator.ollama.chat')
    def test_format_omitted_by_default(self, mock_chat):
        mock_chat.return_value = {'message': {'content': 'text'}}

        OllamaGenerator(model_name='m').generate('prompt')

        assert 'format' not in mock_chat.call_args.kwargs
