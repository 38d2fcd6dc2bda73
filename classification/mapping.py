MAP_IN2INTERNAL = {
"ID": "Document_Id",
"Document ID": "Document_Id",
"Doc ID": "Document_Id",
"Title": "Title",
"Document Title": "Title",
"Text": "Document_Text",
"Content": "Document_Text",
"Extracted Text": "Document_Text",
"File": "Source_File",
"File Name": "Source_File",
}


ORDER_OUTCOLS = [
"Document_Id", "Title", "Source_File",
"Category", "Subjects", "Priority",
"Confidence", "Needs_Review",
"Tags", "Regulatory_References", "Aircraft_Types",
"Related_Documents",
]
